from pydantic import BaseModel


class GenericMessageResponse(BaseModel):
    success: bool = True
    message: str
