from __future__ import annotations

from pydantic import BaseModel


class SignupRequest(BaseModel):
    fullname: str = ""
    email: str = ""
    password: str = ""


class SigninRequest(BaseModel):
    email: str = ""
    password: str = ""


class GoogleAuthRequest(BaseModel):
    access_token: str


class AuthResponse(BaseModel):
    access_token: str
    profile_img: str
    username: str
    fullname: str


class UploadURLResponse(BaseModel):
    uploadURL: str
