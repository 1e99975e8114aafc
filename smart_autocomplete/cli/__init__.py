from .cli import CLI, build_engine, main

__all__ = ["CLI", "build_engine", "main"]
