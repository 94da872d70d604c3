from pydantic import BaseModel, ConfigDict, Field


class CsrfTokenResponse(BaseModel):
    csrf_token: str = Field(min_length=64, max_length=64, pattern="^[0-9a-f]+$")
    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {"csrf_token": "9f2c" * 16},
            ]
        },
    )


class CsrfVerifyResponse(BaseModel):
    valid: bool
