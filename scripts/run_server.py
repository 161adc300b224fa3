#!/usr/bin/env python3
"""
Server launcher for React Dictionary.
"""
import uvicorn

from react_dictionary.config import settings


def main():
    """Launch the API server"""
    print(f"Starting React Dictionary on {settings.host}:{settings.port}")
    print(f"Terms file: {settings.terms_file}")
    print(f"Environment: {settings.environment}")

    uvicorn.run(
        "react_dictionary.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level="info" if settings.debug else "warning"
    )


if __name__ == "__main__":
    main()
