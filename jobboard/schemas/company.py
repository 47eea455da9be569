from pydantic import BaseModel, EmailStr, field_validator


def _normalize_email(v: str) -> str:
    return v.strip().lower()


class CompanyRegister(BaseModel):
    name: str
    email: EmailStr
    password: str

    class Config:
        extra = "forbid"

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Company name is required")
        return v

    @field_validator("email")
    @classmethod
    def email_lowercase(cls, v: str) -> str:
        return _normalize_email(v)

    @field_validator("password")
    @classmethod
    def password_min_length(cls, v: str) -> str:
        if len(v) < 8:
            raise ValueError("Password must be at least 8 characters")
        return v


class CompanyLogin(BaseModel):
    email: EmailStr
    password: str

    class Config:
        extra = "forbid"

    @field_validator("email")
    @classmethod
    def email_lowercase(cls, v: str) -> str:
        return _normalize_email(v)


class CompanyResponse(BaseModel):
    id: str
    name: str
    email: str
    logo_url: str

    class Config:
        from_attributes = True


class CompanySession(BaseModel):
    token: str
    company: CompanyResponse
