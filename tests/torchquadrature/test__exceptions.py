import warnings

import pytest

from torchquadrature import (
    InvalidArgumentError,
    InvalidConfigurationError,
    InvalidDomainError,
    QuadratureError,
    QuadratureWarning,
)


class TestExceptions:
    def test_quadrature_warning_is_user_warning(self):
        assert issubclass(QuadratureWarning, UserWarning)

    def test_quadrature_error_is_value_error(self):
        assert issubclass(QuadratureError, ValueError)

    @pytest.mark.parametrize(
        "cls",
        [
            InvalidDomainError,
            InvalidArgumentError,
            InvalidConfigurationError,
        ],
    )
    def test_subclasses_share_base(self, cls):
        assert issubclass(cls, QuadratureError)

    def test_quadrature_warning_can_be_raised(self):
        with pytest.warns(QuadratureWarning, match="test"):
            warnings.warn("test", QuadratureWarning)

    def test_invalid_domain_can_be_caught_as_value_error(self):
        with pytest.raises(ValueError, match="bound"):
            raise InvalidDomainError("lower bound exceeds upper bound")
