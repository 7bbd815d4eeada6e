from .console_notifier import ConsoleNotifier
from .link_opener import WebBrowserLinkOpener

__all__ = ["ConsoleNotifier", "WebBrowserLinkOpener"]
