"""pycovstruct: structured random-effects covariance matrices.

Maps unconstrained parameter vectors (theta), as used by mixed-model
optimizers, to unstructured, Toeplitz, compound-symmetry, diagonal, AR(1),
Ornstein-Uhlenbeck, spatial exponential, spatial Gaussian and Matern
covariance matrices, and back.

Modules
-------
structures : Kinds, parameter counts, transforms, dispatch and Jacobians.
factors : Coordinate factors for spatial and temporal structures.
density : Multivariate normal log-density under a structure.
vecup : Row-based vectorization of symmetric matrices.
backend : NumPy/PyTorch backend abstraction.
utils : Symmetry and definiteness checks.
"""

__version__ = "0.1.0"

from pycovstruct._control import CovStructControl
from pycovstruct._exceptions import (
    CovStructError,
    CovStructWarning,
    DimensionMismatch,
    InvalidCoordinateEncoding,
    NaNFunctionEvaluationWarning,
    NonPositiveDefiniteResult,
    ValueOutOfRangeWarning,
)
from pycovstruct.backend import get_backend, set_backend
from pycovstruct.density import mvn_logdensity
from pycovstruct.factors import CoordinateFactor, decode_levels, encode_coords, num_factor
from pycovstruct.structures import (
    CovarianceStructure,
    CovKind,
    CovStructResult,
    CovStructSpec,
    build_corr,
    build_cov,
    n_theta,
    requires_coordinates,
    to_theta,
)

__all__ = [
    "__version__",
    "CovKind",
    "CovStructSpec",
    "CovStructResult",
    "CovarianceStructure",
    "CovStructControl",
    "n_theta",
    "requires_coordinates",
    "build_cov",
    "build_corr",
    "to_theta",
    "mvn_logdensity",
    "CoordinateFactor",
    "encode_coords",
    "decode_levels",
    "num_factor",
    "get_backend",
    "set_backend",
    "CovStructError",
    "CovStructWarning",
    "DimensionMismatch",
    "InvalidCoordinateEncoding",
    "NonPositiveDefiniteResult",
    "NaNFunctionEvaluationWarning",
    "ValueOutOfRangeWarning",
]
