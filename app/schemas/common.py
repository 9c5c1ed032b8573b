from pydantic import BaseModel

class ErrorResponse(BaseModel):
    status: int
    message: str
    path: str

class TempUpload(BaseModel):
    tempId: str
