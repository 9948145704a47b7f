import pytest
from pydantic import ValidationError

from modules.users.dtos import CreateUserDTO, UpdateUserDTO

pytestmark = pytest.mark.unit


class TestCreateUserDTO:
    def test_unknown_role(self):
        with pytest.raises(ValidationError, match="Role must be one of"):
            CreateUserDTO(full_name="X", role="admin")

    def test_blank_name(self):
        with pytest.raises(ValidationError):
            CreateUserDTO(full_name=" ", role="driver")

    def test_invalid_email(self):
        with pytest.raises(ValidationError):
            CreateUserDTO(full_name="X", role="driver", email="not-an-email")


class TestUpdateUserDTO:
    def test_role_checked_when_present(self):
        with pytest.raises(ValidationError):
            UpdateUserDTO(role="owner")

    def test_empty_update_allowed(self):
        assert UpdateUserDTO().model_dump(exclude_none=True) == {}
