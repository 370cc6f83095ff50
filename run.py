#!/usr/bin/env python3
"""Run the application."""
import uvicorn

from resumate.api.dependencies import get_config

if __name__ == "__main__":
    config = get_config()
    uvicorn.run(
        "resumate.main:app",
        host=config.server.host,
        port=config.server.port,
        reload=True,
    )
