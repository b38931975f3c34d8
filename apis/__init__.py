"""
APIs module for external interfaces.
Provides a REST diagnostics view over a plugin class loader.
"""

from fastapi import FastAPI

from plugins import ClassLoader

def create_app(class_loader: ClassLoader) -> FastAPI:
    """Create and configure FastAPI application."""
    from .routes import router
    app = FastAPI(
        title="Plugin Class Loader API",
        description="Declared plugin classes and library lifecycle state",
        version="1.0.0"
    )
    app.state.class_loader = class_loader
    app.include_router(router)
    return app
