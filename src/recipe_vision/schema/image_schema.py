import base64
from pydantic import BaseModel, ConfigDict


class SelectedImage(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    mime_type: str
    data: bytes

    @property
    def preview_url(self) -> str:
        payload = base64.b64encode(self.data).decode("ascii")
        return f"data:{self.mime_type};base64,{payload}"
