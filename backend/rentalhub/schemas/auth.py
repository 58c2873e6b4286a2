# rentalhub/schemas/auth.py
from pydantic import BaseModel


class Principal(BaseModel):
    """
    The authenticated caller, passed explicitly into every service call.
    """
    user_id: int
    role: str

    model_config = {"frozen": True}
