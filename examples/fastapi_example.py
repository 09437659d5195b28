"""
FastAPI Integration Example for extguard.

Runs the extension policy service with executables blocked out of the box,
a 20MB upload ceiling and uploads kept under ./example_uploads.
"""

import logging

import uvicorn

from extguard.api import create_app
from extguard.config import ExtGuardConfig, PolicyLimits

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

config = ExtGuardConfig(
    fixed_extensions={
        **ExtGuardConfig.DEFAULT_FIXED_EXTENSIONS,
        "exe": True,
        "scr": True,
    },
    limits=PolicyLimits(max_file_size=20 * 1024 * 1024),
)

app = create_app(config=config, upload_dir="example_uploads")


if __name__ == "__main__":
    print("Starting extguard FastAPI Example Server...")
    print("API Documentation: http://localhost:8000/docs")
    print("Example endpoints:")
    print("  GET  http://localhost:8000/api/extensions/fixed")
    print("  POST http://localhost:8000/api/extensions/custom?extension=virus")
    print("  POST http://localhost:8000/api/upload/file")
    print("  GET  http://localhost:8000/api/extensions/check?filename=doc.pdf.exe")
    print("\nPress CTRL+C to stop")

    uvicorn.run(app, host="0.0.0.0", port=8000)
