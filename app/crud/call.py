from pydantic import BaseModel
from app.crud.base import CRUDBase
from app.models.call import Call


class CRUDCall(CRUDBase[Call, BaseModel, BaseModel]):
    """
    CRUD operations for Call model.

    Calls are written by the voice provider's webhook; here they are only
    listed and purged.
    """


# Create a singleton instance
call = CRUDCall(Call)
