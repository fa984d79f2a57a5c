"""PyQt6 glue between widgets and the media layer.

 - ``ViewportFilter`` forwards a watched widget's width to ``MatchMedia`` on
   every resize, which in turn publishes breakpoint transitions.
 - ``QtMediaBridge`` turns ``STYLES_UPDATED`` bus events into Qt signals and
   swaps the print stylesheet onto watched widgets while printing.
   ``begin_print`` / ``end_print`` bracket a print job (e.g. around
   ``QPrinter`` rendering) by flipping the print media state.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from PyQt6.QtCore import QEvent, QObject, pyqtSignal
from PyQt6.QtWidgets import QWidget

from .breakpoints import PRINT
from .match_media import MatchMedia
from .print_stylesheet import build_print_stylesheet
from .services.event_bus import Event, EventBus, MediaEvent

__all__ = ["ViewportFilter", "QtMediaBridge"]


class ViewportFilter(QObject):
    def __init__(self, match_media: MatchMedia, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._match_media = match_media

    def eventFilter(self, watched: QObject, event: QEvent) -> bool:  # noqa: N802
        if event.type() == QEvent.Type.Resize and isinstance(watched, QWidget):
            self._match_media.update(width=watched.width())
        return False


class QtMediaBridge(QObject):
    stylesUpdated = pyqtSignal(list)
    printModeChanged = pyqtSignal(bool)

    def __init__(
        self, bus: EventBus, match_media: MatchMedia, parent: Optional[QObject] = None
    ) -> None:
        super().__init__(parent)
        self._bus = bus
        self._match_media = match_media
        self._printing = False
        self._widgets: Dict[int, QWidget] = {}
        self._filters: Dict[int, ViewportFilter] = {}
        self._base_styles: Dict[int, str] = {}
        self._subscription = bus.subscribe(MediaEvent.STYLES_UPDATED, self._on_styles_updated)

    @property
    def printing(self) -> bool:
        return self._printing

    @property
    def watched(self) -> List[QWidget]:
        return list(self._widgets.values())

    def watch(self, widget: QWidget) -> None:
        wid = id(widget)
        if wid in self._filters:
            return
        filt = ViewportFilter(self._match_media, widget)
        widget.installEventFilter(filt)
        self._widgets[wid] = widget
        self._filters[wid] = filt
        self._base_styles[wid] = widget.styleSheet()
        # Qt may destroy the widget before close(); stop touching it from then on.
        widget.destroyed.connect(lambda _obj=None, wid=wid: self._forget(wid))
        self._match_media.update(width=widget.width())

    def begin_print(self) -> None:
        self._match_media.update(printing=True)

    def end_print(self) -> None:
        self._match_media.update(printing=False)

    def close(self) -> None:
        self._bus.unsubscribe(self._subscription)
        for wid, widget in self._widgets.items():
            widget.removeEventFilter(self._filters[wid])
        self._widgets.clear()
        self._filters.clear()
        self._base_styles.clear()

    def _forget(self, wid: int) -> None:
        self._widgets.pop(wid, None)
        self._filters.pop(wid, None)
        self._base_styles.pop(wid, None)

    def stylesheet_for(self, aliases: Sequence[str]) -> str:
        """Print stylesheet while the print alias is active, else empty."""
        if PRINT not in aliases:
            return ""
        return build_print_stylesheet(list(aliases))[0]

    def _on_styles_updated(self, event: Event) -> None:
        aliases: List[str] = list(event.payload["aliases"])
        printing = bool(event.payload["printing"])
        if printing != self._printing:
            self._printing = printing
            self.printModeChanged.emit(printing)
        for wid, widget in list(self._widgets.items()):
            widget.setStyleSheet(self.stylesheet_for(aliases) or self._base_styles[wid])
        self.stylesUpdated.emit(aliases)
