"""Script de ejecución.

`python -m main locate` desde `src/` durante desarrollo; instalado, el mismo
comando es `sdl-locator locate`.
"""

from __future__ import annotations

from cli.main import run

if __name__ == "__main__":
    run()
