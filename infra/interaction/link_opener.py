from __future__ import annotations

import webbrowser


class WebBrowserLinkOpener:
    def open(self, url: str) -> None:
        webbrowser.open_new_tab(url)
