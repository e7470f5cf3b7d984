"""Structured covariance matrices from unconstrained parameter vectors.

Nine structures are supported, selected by their formula tag:

=====  ===================  =============  ===========
tag    structure            n_theta        coordinates
=====  ===================  =============  ===========
us     unstructured         n(n+1)/2       no
toep   Toeplitz             2n-1           no
cs     compound symmetry    n+1            no
diag   diagonal             n              no
ar1    AR(1)                2              no
ou     Ornstein-Uhlenbeck   2              yes (1-D)
exp    spatial exponential  2              yes
gau    spatial Gaussian     2              yes
mat    spatial Matern       3              yes
=====  ===================  =============  ===========

Theta always starts with log standard deviations (n of them for the first
four kinds, one shared value otherwise).
"""

from pycovstruct.structures._banded import cs_corr, cs_lower_bound, diag_corr, toep_corr
from pycovstruct.structures._decay import ar1_corr, exp_corr, gau_corr, ou_corr
from pycovstruct.structures._dispatch import (
    CovarianceStructure,
    build_corr,
    build_cov,
    build_cov_array,
)
from pycovstruct.structures._distance import lag_matrix, pairwise_distance
from pycovstruct.structures._gradient import grad_cov_theta
from pycovstruct.structures._kinds import (
    CovKind,
    check_theta,
    n_theta,
    requires_coordinates,
)
from pycovstruct.structures._matern import mat_corr, matern_correlation
from pycovstruct.structures._result import CovStructResult
from pycovstruct.structures._spec import CovStructSpec
from pycovstruct.structures._squash import squash, unsquash
from pycovstruct.structures._to_theta import to_theta
from pycovstruct.structures._unstructured import us_corr, us_theta

__all__ = [
    "CovKind",
    "CovStructSpec",
    "CovStructResult",
    "CovarianceStructure",
    "n_theta",
    "requires_coordinates",
    "check_theta",
    "build_cov",
    "build_corr",
    "build_cov_array",
    "to_theta",
    "grad_cov_theta",
    "us_corr",
    "us_theta",
    "toep_corr",
    "cs_corr",
    "cs_lower_bound",
    "diag_corr",
    "ar1_corr",
    "ou_corr",
    "exp_corr",
    "gau_corr",
    "mat_corr",
    "matern_correlation",
    "squash",
    "unsquash",
    "lag_matrix",
    "pairwise_distance",
]
