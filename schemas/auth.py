from pydantic import BaseModel


class LoginRequest(BaseModel):
    # Emptiness is checked by the authenticator so it can answer 400
    email: str = ""
    password: str = ""


class Token(BaseModel):
    token: str
