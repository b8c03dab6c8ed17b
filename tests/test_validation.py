from hightribe.domain.schemas.auth import LoginRequest, RegisterRequest, SignUpForm, UpdateUserRequest
from hightribe.domain.schemas.user import UserCreate
from hightribe.domain.validation import FieldError, SchemaValidator

from conftest import registration


def fields(result):
    return {error.field for error in result.errors}


def messages(result):
    return {error.field: error.message for error in result.errors}


class TestLoginValidation:
    validator = SchemaValidator(LoginRequest)

    def test_valid(self):
        result = self.validator.validate({"email": "ada@example.com", "password": "secret123"})
        assert result.ok
        assert result.value.email == "ada@example.com"

    def test_reports_every_field(self):
        result = self.validator.validate({"email": "not-an-email", "password": "123"})
        assert not result.ok
        assert fields(result) == {"email", "password"}

    def test_non_object_body(self):
        result = self.validator.validate(["ada@example.com"])
        assert result.errors == [FieldError("body", "Expected a JSON object")]


class TestRegisterValidation:
    validator = SchemaValidator(RegisterRequest)

    def test_valid_payload_is_normalized(self):
        result = self.validator.validate(registration())
        assert result.ok
        assert result.value.full_name == "Ada Lovelace"
        assert result.value.confirm_password == result.value.password

    def test_passwords_must_match(self):
        result = self.validator.validate(registration(confirmPassword="secret999"))
        assert messages(result) == {"confirmPassword": "Passwords do not match"}

    def test_empty_body_lists_all_fields(self):
        result = self.validator.validate({})
        assert fields(result) == {"fullName", "email", "password", "confirmPassword", "phone"}

    def test_short_phone_and_empty_name(self):
        result = self.validator.validate(registration(fullName="", phone="555"))
        assert fields(result) == {"fullName", "phone"}

    def test_field_error_serialization(self):
        result = self.validator.validate(registration(email="nope"))
        assert result.errors[0].to_dict()["field"] == "email"
        assert set(result.errors[0].to_dict()) == {"field", "message"}


class TestUpdateValidation:
    validator = SchemaValidator(UpdateUserRequest)

    def test_password_is_optional(self):
        body = {"fullName": "Ada", "email": "ada@example.com", "phone": "5550001111"}
        result = self.validator.validate(body)
        assert result.ok
        assert result.value.password is None

    def test_password_checked_when_present(self):
        body = {"fullName": "Ada", "email": "ada@example.com", "phone": "5550001111", "password": "abc"}
        assert fields(self.validator.validate(body)) == {"password"}


class TestUserCreateValidation:
    validator = SchemaValidator(UserCreate)

    def test_custom_messages(self):
        result = self.validator.validate(
            {"fullName": "", "email": "bad", "password": "123", "phone": ""}
        )
        assert messages(result) == {
            "fullName": "Name is required",
            "email": "Invalid email format",
            "password": "Password must be at least 6 characters",
            "phone": "Phone number is required",
        }

    def test_short_phone_is_accepted(self):
        result = self.validator.validate(
            {"fullName": "Ada", "email": "ada@example.com", "password": "secret123", "phone": "1"}
        )
        assert result.ok


class TestSignUpForm:
    validator = SchemaValidator(SignUpForm)

    def form(self, **overrides):
        body = {
            "firstName": "Ada",
            "lastName": "Lovelace",
            "phone": "5550001111",
            "email": "ada@example.com",
            "password": "secret123",
            "terms": True,
        }
        body.update(overrides)
        return body

    def test_terms_must_be_literally_true(self):
        expected = {"terms": "You must agree to the Terms & Condition"}
        assert messages(self.validator.validate(self.form(terms=False))) == expected
        assert messages(self.validator.validate(self.form(terms="true"))) == expected

        missing = self.form()
        del missing["terms"]
        assert messages(self.validator.validate(missing)) == expected

    def test_name_messages(self):
        result = self.validator.validate(self.form(firstName="A", lastName=""))
        assert messages(result) == {
            "firstName": "First name is required",
            "lastName": "Last name is required",
        }

    def test_builds_registration(self):
        form = self.validator.validate(self.form()).value
        request = form.to_register_request()

        assert request.full_name == "Ada Lovelace"
        assert request.confirm_password == request.password == "secret123"
        assert request.phone == "5550001111"
