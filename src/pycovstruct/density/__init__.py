"""Log-density of random effects under a structured covariance."""

from pycovstruct.density._mvn import mvn_logdensity

__all__ = ["mvn_logdensity"]
