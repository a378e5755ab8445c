from pydantic import BaseModel


class UploadOut(BaseModel):
    url: str
    key: str
    bytes: int
    mime: str
