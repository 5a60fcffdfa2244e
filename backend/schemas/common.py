from pydantic import BaseModel

# Generic acknowledgement body, also used for error responses
class Message(BaseModel):
    message: str


# JSON true/false must not pass as 1/0 in numeric fields
def reject_bool(value):
    if isinstance(value, bool):
        raise ValueError("boolean is not a number")
    return value
