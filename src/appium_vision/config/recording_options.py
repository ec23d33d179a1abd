"""Screen recording options.

Starting and stopping a screen recording accepts an options object. These
models list the recognized keys with their defaults. Upload keys only
apply together with ``remotePath``; without it the recording comes back as
base64 in the command result.
"""

from typing import Annotated, Any, Literal

from pydantic import Field, StringConstraints, field_validator, model_validator

from .wire_model import WireModel

# Keys that only mean something when the video is uploaded
UPLOAD_ONLY_KEYS = ("user", "pass", "method", "fileFieldName", "formFields", "headers")

MAX_TIME_LIMIT = 1800


class RecordingUploadOptions(WireModel):
    """Where and how a finished recording is uploaded."""

    remote_path: str | None = Field(
        None,
        alias="remotePath",
        description="http(s) or ftp location to upload the video to",
    )
    user: str | None = Field(None, description="User name for the remote authentication")
    password: str | None = Field(None, alias="pass", description="Password for the remote authentication")
    method: Literal["PUT", "POST", "PATCH"] = Field(
        "PUT", description="HTTP multipart upload method"
    )
    file_field_name: str | None = Field(
        None,
        alias="fileFieldName",
        description="Form field holding the video in multipart uploads",
    )
    form_fields: dict[str, str] | list[list[str]] | None = Field(
        None,
        alias="formFields",
        description="Extra form fields for multipart uploads",
    )
    headers: dict[str, str] | None = Field(None, description="Extra headers for the upload request")

    @model_validator(mode="after")
    def _upload_keys_need_remote_path(self) -> "RecordingUploadOptions":
        if self.remote_path is None:
            given = [
                key
                for key in ("user", "password", "file_field_name", "form_fields", "headers")
                if getattr(self, key) is not None
            ]
            if given:
                raise ValueError(f"{', '.join(given)} need remotePath")
        return self

    def to_wire(self, only_set: bool = False) -> dict[str, Any]:
        """Serialize using wire key names, leaving out unset optional keys."""
        data = self.model_dump(by_alias=True, exclude_unset=only_set, exclude_none=True)
        if self.remote_path is None:
            for key in UPLOAD_ONLY_KEYS:
                data.pop(key, None)
        return data


class RecordingOptions(RecordingUploadOptions):
    """Options for starting a screen recording."""

    force_restart: bool | None = Field(
        None,
        alias="forceRestart",
        description="Drop a running recording and start a new one",
    )
    video_size: Annotated[str, StringConstraints(pattern=r"^\d+x\d+$")] | None = Field(
        None,
        alias="videoSize",
        description="Video size as WIDTHxHEIGHT, the display size by default",
    )
    time_limit: str = Field(
        "180",
        alias="timeLimit",
        description="Maximum recording time in seconds, up to 1800",
    )
    bit_rate: str = Field(
        "4000000",
        alias="bitRate",
        description="Video bit rate in bits per second",
    )
    bug_report: bool | None = Field(
        None,
        alias="bugReport",
        description="Overlay extra debugging information on the video",
    )

    @field_validator("time_limit", "bit_rate", mode="before")
    @classmethod
    def _positive_integer_string(cls, value: Any) -> str:
        if isinstance(value, bool) or not isinstance(value, (int, str)):
            raise ValueError("must be a positive integer")
        text = str(value)
        if not text.isdigit() or int(text) <= 0:
            raise ValueError("must be a positive integer")
        return text

    @field_validator("time_limit")
    @classmethod
    def _time_limit_range(cls, value: str) -> str:
        if int(value) > MAX_TIME_LIMIT:
            raise ValueError(f"must be at most {MAX_TIME_LIMIT} seconds")
        return value
