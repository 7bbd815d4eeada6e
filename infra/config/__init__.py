from .filesystem_config_provider import FileSystemConfigProvider, resolve_timezone

__all__ = ["FileSystemConfigProvider", "resolve_timezone"]
