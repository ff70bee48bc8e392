"""Adaptador del API SDL (forma del wire + validación).

Expone:
- Modelos del wire: `SdlResponse`, `SdlAccession`, `SdlFile`, `SdlLocation`.
- `parse_response` para decodificar un cuerpo crudo.
"""

from adapters.sdl.models import (
    SdlAccession,
    SdlApiError,
    SdlFile,
    SdlLocation,
    SdlResponse,
    parse_response,
)

__all__ = [
	"SdlAccession",
	"SdlApiError",
	"SdlFile",
	"SdlLocation",
	"SdlResponse",
	"parse_response",
]
