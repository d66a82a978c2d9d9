"""Client configuration.

ClientOptions is built once per Client and never changes afterwards. The
session/processor defaults are derived while the model is validated, from a
copy of the caller's input, so the caller's mapping is left untouched.

Both snake_case and the camelCase names used by other Gremlin drivers are
accepted:

    ClientOptions(traversal_source="g", session="abc123")
    ClientOptions.model_validate({"traversalSource": "g", "processor": "session"})
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel

from ..utils import get_uuid

logger = logging.getLogger(__name__)

SESSION_PROCESSOR = "session"
DEFAULT_TRAVERSAL_SOURCE = "g"

# Environment variable -> option field
ENV_VARS = {
    "GREMLIN_TRAVERSAL_SOURCE": "traversal_source",
    "GREMLIN_PROCESSOR": "processor",
    "GREMLIN_SESSION": "session",
    "GREMLIN_MIME_TYPE": "mime_type",
    "GREMLIN_REJECT_UNAUTHORIZED": "reject_unauthorized",
}

_FALSE_VALUES = {"0", "false", "no", "off"}


class ClientOptions(BaseModel):
    """Immutable options for a Client and its connection.

    Session derivation (in this order):
    1. processor == "session" without a session id -> a fresh id is generated
    2. a session id without a processor -> processor becomes "session"

    Unrecognized options are kept (see ``model_extra``) and handed to the
    connection together with the transport options below.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="allow",
        populate_by_name=True,
        alias_generator=to_camel,
        arbitrary_types_allowed=True,
    )

    # Left untyped so odd values never fail construction
    traversal_source: Any = None
    processor: Any = None
    session: Any = None

    # Transport options, opaque to the client
    mime_type: Any = None
    ca: Any = None
    cert: Any = None
    pfx: Any = None
    reader: Any = None
    writer: Any = None
    authenticator: Any = None
    reject_unauthorized: Any = None

    @model_validator(mode="before")
    @classmethod
    def _derive_session(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data

        data = dict(data)
        # Ids such as uuid.UUID or ints are sent as text
        for key in ("session", "processor"):
            if data.get(key) is not None and not isinstance(data[key], str):
                data[key] = str(data[key])
        if data.get("processor") == SESSION_PROCESSOR:
            # compatibility with the old "session" processor
            if not data.get("session"):
                data["session"] = get_uuid()
                logger.debug(f"Generated session id {data['session']}")
        if data.get("session") is not None:
            data["processor"] = data.get("processor") or SESSION_PROCESSOR
        return data

    @property
    def alias_target(self) -> str:
        """Traversal source the script alias ``g`` is bound to."""
        return str(self.traversal_source or DEFAULT_TRAVERSAL_SOURCE)

    @property
    def is_session_mode(self) -> bool:
        """True when script requests must carry the session id."""
        return self.session is not None and self.processor == SESSION_PROCESSOR

    @classmethod
    def coerce(cls, options: ClientOptions | Mapping[str, Any] | None) -> ClientOptions:
        """Build options from None, a mapping, or existing options."""
        if options is None:
            return cls()
        if isinstance(options, ClientOptions):
            return options
        return cls.model_validate(options)

    @classmethod
    def from_env(cls, **overrides: Any) -> ClientOptions:
        """Build options from GREMLIN_* environment variables.

        Args:
            **overrides: Explicit option values, taking precedence over the
                environment

        Returns:
            ClientOptions with session derivation applied to the merged values
        """
        values: dict[str, Any] = {}
        for env_var, field_name in ENV_VARS.items():
            raw = os.getenv(env_var)
            if raw is None or raw == "":
                continue
            if field_name == "reject_unauthorized":
                values[field_name] = raw.strip().lower() not in _FALSE_VALUES
            else:
                values[field_name] = raw
        values.update(overrides)
        return cls.model_validate(values)
