from typing import Optional
from pydantic import BaseModel, Field

# ---------- Inputs ----------

class SignInIn(BaseModel):
    email: str = Field(min_length=3, max_length=254)
    password: str = Field(min_length=1, max_length=128)


# ---------- Outputs ----------

class TokenOut(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int  # secondes (durée de la session)


class AdminOut(BaseModel):
    id: int
    email: str
    name: Optional[str] = None

    model_config = {"from_attributes": True}
