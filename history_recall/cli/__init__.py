# history_recall/cli - command line entry point and stdin/stdout transports

from .cli import decode_request, main, serve_human, serve_json

__all__ = ["decode_request", "main", "serve_human", "serve_json"]
