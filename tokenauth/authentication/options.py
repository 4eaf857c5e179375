from typing import Any

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    ValidationInfo,
    field_validator,
)

from tokenauth.authentication.lookup import FieldChain, parse_field_path

QUERY_FALLBACKS = {
    "username_query": "username_field",
    "token_query": "token_field",
}


class TokenStrategyOptions(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    username_header: str = Field(
        default="x-username",
        validation_alias=AliasChoices("username_header", "usernameHeader"),
    )
    token_header: str = Field(
        default="x-token",
        validation_alias=AliasChoices("token_header", "tokenHeader"),
    )
    username_field: str = Field(
        default="username",
        validation_alias=AliasChoices("username_field", "usernameField"),
    )
    token_field: str = Field(
        default="token",
        validation_alias=AliasChoices("token_field", "tokenField"),
    )
    username_query: str | None = Field(
        default=None,
        validate_default=True,
        validation_alias=AliasChoices("username_query", "usernameQuery"),
    )
    token_query: str | None = Field(
        default=None,
        validate_default=True,
        validation_alias=AliasChoices("token_query", "tokenQuery"),
    )
    pass_request_to_verifier: bool = Field(
        default=False,
        validation_alias=AliasChoices("pass_request_to_verifier", "passReqToCallback"),
    )
    verify_timeout: float | None = Field(
        default=30.0,
        gt=0,
        validation_alias=AliasChoices("verify_timeout", "verifyTimeout"),
    )

    _username_field_chain: FieldChain = PrivateAttr()
    _token_field_chain: FieldChain = PrivateAttr()
    _username_query_chain: FieldChain = PrivateAttr()
    _token_query_chain: FieldChain = PrivateAttr()

    @field_validator(
        "username_header", "token_header", "username_field", "token_field", mode="before"
    )
    @classmethod
    def normalize_name(cls, value: Any, info: ValidationInfo) -> Any:
        if not value:
            return cls.model_fields[info.field_name].default
        if isinstance(value, str):
            return value.lower()
        return value

    @field_validator("username_query", "token_query", mode="before")
    @classmethod
    def normalize_query_name(cls, value: Any, info: ValidationInfo) -> Any:
        if not value:
            return info.data.get(QUERY_FALLBACKS[info.field_name])
        if isinstance(value, str):
            return value.lower()
        return value

    def model_post_init(self, context: Any) -> None:
        self._username_field_chain = parse_field_path(self.username_field)
        self._token_field_chain = parse_field_path(self.token_field)
        self._username_query_chain = parse_field_path(self.username_query)
        self._token_query_chain = parse_field_path(self.token_query)

    @property
    def username_field_chain(self) -> FieldChain:
        return self._username_field_chain

    @property
    def token_field_chain(self) -> FieldChain:
        return self._token_field_chain

    @property
    def username_query_chain(self) -> FieldChain:
        return self._username_query_chain

    @property
    def token_query_chain(self) -> FieldChain:
        return self._token_query_chain
