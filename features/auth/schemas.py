from ninja import Schema


class LoginSchema(Schema):
    username: str
    password: str


class RefreshSchema(Schema):
    refresh: str


class TokenSchema(Schema):
    access: str
    refresh: str
    user_id: int
    username: str


class AuthErrorSchema(Schema):
    status: str
    message: str
    code: int
