#!/usr/bin/env python3
"""
API server runner for the plugin class loader.
Serves the diagnostics endpoints for one base capability.

Usage:
    python run_api.py <package> <base_capability_type> [--source module:callable]

The optional source names a zero-argument callable returning an
IManifestSource; without it the in-memory source registered by default is used.
"""

import argparse
import importlib
import logging

import uvicorn

from apis import create_app
from config.settings import settings
from di import ComponentFactory, build_container
from interfaces import IManifestSource
from plugins import ManifestSourceError
from utils.helpers import setup_logging, get_system_info

def _load_source(target: str):
    module_name, _, attr = target.partition(":")
    if not attr:
        raise ValueError(f"Manifest source must look like module:callable, got '{target}'")
    return getattr(importlib.import_module(module_name), attr)()

def main():
    """Main entry point for API server."""
    parser = argparse.ArgumentParser(description="Plugin class loader diagnostics API")
    parser.add_argument("package")
    parser.add_argument("base_capability_type")
    parser.add_argument("--source", help="module:callable returning an IManifestSource")
    args = parser.parse_args()

    setup_logging()

    try:
        settings.validate()
    except ValueError as e:
        logging.error(f"Configuration error: {e}")
        return

    container = build_container()
    if args.source:
        container.register_instance(IManifestSource, _load_source(args.source))

    try:
        loader = ComponentFactory(container).create_class_loader(args.package, args.base_capability_type)
    except ManifestSourceError as e:
        logging.error(f"Plugin discovery failed: {e}")
        return

    logging.info(f"System info: {get_system_info()}")
    logging.info(f"Starting plugin API server on {settings.API_HOST}:{settings.API_PORT}")

    uvicorn.run(
        create_app(loader),
        host=settings.API_HOST,
        port=settings.API_PORT,
        log_level=settings.LOG_LEVEL.lower(),
        access_log=True
    )

if __name__ == "__main__":
    main()
