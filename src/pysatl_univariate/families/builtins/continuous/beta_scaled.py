"""
Scaled beta distribution.

Beta distribution moved to ``location`` and stretched by ``scale``: if
``Y ~ Beta(α, β)`` then ``location + scale * Y`` is scaled-beta distributed on
``[location, location + scale]``.

The PERT distribution used in project planning is a scaled beta
distribution built from a minimum, a maximum and a most likely value, see
:meth:`BetaScaled.pert`.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING

import numpy as np

from pysatl_univariate.distributions.distribution import ContinuousDistribution
from pysatl_univariate.distributions.sampling import fill_sequentially, new_buffer, sample_stream
from pysatl_univariate.distributions.support import ContinuousSupport
from pysatl_univariate.errors import NotSupportedError
from pysatl_univariate.families.builtins.continuous import beta as standard
from pysatl_univariate.families.parametrizations import (
    Parametrization,
    constraint,
    parametrization,
)
from pysatl_univariate.random_source import resolve_random_source

if TYPE_CHECKING:
    from collections.abc import Iterator

    import numpy.typing as npt

    from pysatl_univariate.types import FloatArray


@parametrization(name="shapesLocationScale")
class BetaScaledShapes(Parametrization):
    """
    Standard parametrization of scaled beta distribution.

    Parameters
    ----------
    alpha : float
        First shape parameter (α)
    beta : float
        Second shape parameter (β)
    location : float
        Left end of the support
    scale : float
        Width of the support
    """

    alpha: float
    beta: float
    location: float
    scale: float

    @constraint(description="alpha > 0")
    def check_alpha_positive(self) -> bool:
        return self.alpha > 0

    @constraint(description="beta > 0")
    def check_beta_positive(self) -> bool:
        return self.beta > 0

    @constraint(description="scale > 0")
    def check_scale_positive(self) -> bool:
        return self.scale > 0

    @constraint(description="location is not NaN")
    def check_location_not_nan(self) -> bool:
        return not math.isnan(self.location)


@parametrization(name="pert")
class BetaScaledPert(Parametrization):
    """
    PERT parametrization of scaled beta distribution.

    Parameters
    ----------
    minimum : float
        Smallest possible value
    maximum : float
        Largest possible value
    likely : float
        Most likely value
    """

    minimum: float
    maximum: float
    likely: float

    @constraint(description="minimum < maximum")
    def check_minimum_lt_maximum(self) -> bool:
        return self.minimum < self.maximum

    @constraint(description="minimum <= likely <= maximum")
    def check_likely_inside(self) -> bool:
        return self.minimum <= self.likely <= self.maximum

    def transform_to_base_parametrization(self) -> Parametrization:
        """
        Transform to the shapes-location-scale parametrization.

        Uses the PERT weight 4 for the most likely value, so the mean is
        ``(minimum + maximum + 4 * likely) / 6``.
        """
        lo, hi, likely = self.minimum, self.maximum, self.likely
        mean = (lo + hi + 4.0 * likely) / 6.0
        if mean == likely:
            alpha = 3.0
        else:
            alpha = (mean - lo) * (2.0 * likely - lo - hi) / ((likely - mean) * (hi - lo))
        beta = alpha * (hi - mean) / (mean - lo)
        return BetaScaledShapes(alpha=alpha, beta=beta, location=lo, scale=hi - lo)


def is_valid_parameter_set(alpha: float, beta: float, location: float, scale: float) -> bool:
    return BetaScaledShapes(alpha=alpha, beta=beta, location=location, scale=scale).is_valid()


def _pdf(alpha: float, beta: float, location: float, scale: float, x: float) -> float:
    return standard.pdf_unchecked(alpha, beta, (x - location) / scale) / scale


def _pdf_ln(alpha: float, beta: float, location: float, scale: float, x: float) -> float:
    return standard.pdf_ln_unchecked(alpha, beta, (x - location) / scale) - math.log(scale)


def _cdf(alpha: float, beta: float, location: float, scale: float, x: float) -> float:
    return standard.cdf_unchecked(alpha, beta, (x - location) / scale)


def _inv_cdf(alpha: float, beta: float, location: float, scale: float, p: float) -> float:
    return standard.inv_cdf_unchecked(alpha, beta, p) * scale + location


def pdf(alpha: float, beta: float, location: float, scale: float, x: float) -> float:
    """Standard beta density at ``(x - location) / scale``, divided by ``scale``."""
    BetaScaledShapes(alpha=alpha, beta=beta, location=location, scale=scale).validate()
    return _pdf(alpha, beta, location, scale, x)


def pdf_ln(alpha: float, beta: float, location: float, scale: float, x: float) -> float:
    BetaScaledShapes(alpha=alpha, beta=beta, location=location, scale=scale).validate()
    return _pdf_ln(alpha, beta, location, scale, x)


def cdf(alpha: float, beta: float, location: float, scale: float, x: float) -> float:
    BetaScaledShapes(alpha=alpha, beta=beta, location=location, scale=scale).validate()
    return _cdf(alpha, beta, location, scale, x)


def inv_cdf(alpha: float, beta: float, location: float, scale: float, p: float) -> float:
    BetaScaledShapes(alpha=alpha, beta=beta, location=location, scale=scale).validate()
    return _inv_cdf(alpha, beta, location, scale, p)


def sample_unchecked(
    rng: np.random.Generator, alpha: float, beta: float, location: float, scale: float
) -> float:
    """Draw one variate; the parameters are assumed valid."""
    return standard.sample_unchecked(rng, alpha, beta) * scale + location


def sample(
    alpha: float,
    beta: float,
    location: float,
    scale: float,
    *,
    rng: np.random.Generator | None = None,
) -> float:
    BetaScaledShapes(alpha=alpha, beta=beta, location=location, scale=scale).validate()
    return sample_unchecked(resolve_random_source(rng), alpha, beta, location, scale)


def fill_samples(
    values: npt.NDArray[np.float64],
    alpha: float,
    beta: float,
    location: float,
    scale: float,
    *,
    rng: np.random.Generator | None = None,
) -> None:
    BetaScaledShapes(alpha=alpha, beta=beta, location=location, scale=scale).validate()
    source = resolve_random_source(rng)
    fill_sequentially(values, lambda: sample_unchecked(source, alpha, beta, location, scale))


def samples(
    n: int,
    alpha: float,
    beta: float,
    location: float,
    scale: float,
    *,
    rng: np.random.Generator | None = None,
) -> FloatArray:
    values = new_buffer(n, np.float64)
    fill_samples(values, alpha, beta, location, scale, rng=rng)
    return values


def iter_samples(
    alpha: float,
    beta: float,
    location: float,
    scale: float,
    *,
    rng: np.random.Generator | None = None,
) -> Iterator[float]:
    BetaScaledShapes(alpha=alpha, beta=beta, location=location, scale=scale).validate()
    source = resolve_random_source(rng)
    return sample_stream(lambda: sample_unchecked(source, alpha, beta, location, scale))


class BetaScaled(ContinuousDistribution):
    """
    Scaled beta distribution.

    Parameters
    ----------
    alpha : float
        First shape α > 0.
    beta : float
        Second shape β > 0.
    location : float
        Left end of the support.
    scale : float
        Width of the support, positive.
    random_source : numpy.random.Generator, optional
        Generator used for sampling.
    """

    def __init__(
        self,
        alpha: float,
        beta: float,
        location: float,
        scale: float,
        random_source: np.random.Generator | None = None,
    ) -> None:
        self._parameters = BetaScaledShapes(
            alpha=alpha, beta=beta, location=location, scale=scale
        )
        self._parameters.validate()
        self._alpha = alpha
        self._beta = beta
        self._location = location
        self._scale = scale
        self._standard = standard.Beta(alpha, beta)
        self._random_source = resolve_random_source(random_source)

    @classmethod
    def pert(
        cls,
        minimum: float,
        maximum: float,
        likely: float,
        random_source: np.random.Generator | None = None,
    ) -> BetaScaled:
        """
        Construct the PERT distribution.

        Parameters
        ----------
        minimum : float
            Smallest possible value.
        maximum : float
            Largest possible value.
        likely : float
            Most likely value, between ``minimum`` and ``maximum``.
        random_source : numpy.random.Generator, optional
            Generator used for sampling.

        Returns
        -------
        BetaScaled
            Distribution on ``[minimum, maximum]`` with mode ``likely``.
        """
        return cls.from_parametrization(
            BetaScaledPert(minimum=minimum, maximum=maximum, likely=likely), random_source
        )

    def __repr__(self) -> str:
        return (
            f"BetaScaled(alpha={self._alpha}, beta={self._beta}, "
            f"location={self._location}, scale={self._scale})"
        )

    @property
    def alpha(self) -> float:
        return self._alpha

    @property
    def beta(self) -> float:
        return self._beta

    @property
    def location(self) -> float:
        return self._location

    @property
    def scale(self) -> float:
        return self._scale

    @property
    def support(self) -> ContinuousSupport:
        return ContinuousSupport(self._location, self._location + self._scale)

    @property
    def mean(self) -> float:
        return self._location + self._scale * self._standard.mean

    @property
    def variance(self) -> float:
        return self._scale * self._scale * self._standard.variance

    @property
    def entropy(self) -> float:
        return self._standard.entropy + math.log(self._scale)

    @property
    def skewness(self) -> float:
        return self._standard.skewness

    @property
    def mode(self) -> float:
        return self._location + self._scale * self._standard.mode

    @property
    def median(self) -> float:
        raise NotSupportedError("Scaled beta median has no closed form")

    def density(self, x: float) -> float:
        return _pdf(self._alpha, self._beta, self._location, self._scale, x)

    def density_ln(self, x: float) -> float:
        return _pdf_ln(self._alpha, self._beta, self._location, self._scale, x)

    def cumulative_distribution(self, x: float) -> float:
        return _cdf(self._alpha, self._beta, self._location, self._scale, x)

    def inverse_cumulative_distribution(self, p: float) -> float:
        return _inv_cdf(self._alpha, self._beta, self._location, self._scale, p)

    def sample(self) -> float:
        return sample_unchecked(
            self._random_source, self._alpha, self._beta, self._location, self._scale
        )
