from pydantic import BaseModel, EmailStr


# Manager login (POST /admin/auth/login)
class ManagerLogin(BaseModel):
    email: EmailStr
    password: str


class Manager(BaseModel):
    id: int
    email: EmailStr
    name: str
    location_ids: str = ""

    class Config:
        from_attributes = True


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    manager: Manager
