from __future__ import annotations

from src.absensi_pdm.absensi_pdm.main import create_app

app = create_app()


if __name__ == "__main__":
    app.run(debug=bool(app.config.get("DEBUG", False)))
