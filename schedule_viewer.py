#!/usr/bin/env python3
"""StageGrid Schedule Viewer main window."""

import sys
import argparse
import logging
from pathlib import Path
from typing import Optional

import yaml
from PySide6.QtWidgets import QApplication, QMainWindow, QMessageBox, QFileDialog, QWidget
from PySide6.QtCore import Qt, QTimer
from PySide6.QtGui import QAction, QKeySequence
import qdarkstyle

from stagegrid.application.events import ScheduleLoadedEvent, ViewportChangedEvent
from stagegrid.config import UI
from stagegrid.data_model import Schedule
from stagegrid.persistence import load_schedule
from stagegrid.sample_data import create_sample_schedule
from stagegrid.schedule_canvas import ScheduleCanvas
from stagegrid.validation import ScheduleValidationError

logger = logging.getLogger("schedule_viewer")


def show_load_error(parent: Optional[QWidget], path: str, error: Exception) -> int:
    """Report a schedule that could not be loaded, with copyable details."""
    msg = QMessageBox(parent)
    msg.setIcon(QMessageBox.Icon.Critical)
    msg.setWindowTitle("Load Error")
    msg.setText(f"Could not load schedule:\n{path}")
    if isinstance(error, ScheduleValidationError):
        msg.setDetailedText("\n".join(error.problems))
    else:
        msg.setDetailedText(str(error))
    msg.setTextInteractionFlags(Qt.TextInteractionFlag.TextSelectableByMouse | Qt.TextInteractionFlag.TextSelectableByKeyboard)
    msg.setStandardButtons(QMessageBox.StandardButton.Ok)
    return msg.exec()


def schedule_summary(item_count: int, category_count: int) -> str:
    return f"{item_count} items in {category_count} categories"


class ScheduleViewerWindow(QMainWindow):
    """Main window hosting a single ScheduleCanvas."""

    def __init__(self, schedule_file: Optional[str] = None, exit_after_load: bool = False) -> None:
        super().__init__()
        self.setWindowTitle(UI.WINDOW_TITLE)
        self.resize(*UI.WINDOW_SIZE)

        self.canvas = ScheduleCanvas(create_sample_schedule(), parent=self)
        self.setCentralWidget(self.canvas)
        self._summary = schedule_summary(len(self.canvas.schedule.items), len(self.canvas.schedule.categories))
        self.canvas.event_bus.subscribe(ScheduleLoadedEvent, self._on_schedule_loaded)
        self.canvas.event_bus.subscribe(ViewportChangedEvent, self._on_viewport_changed)
        self._create_actions()
        self._update_status()

        if schedule_file:
            self.load_schedule_file(schedule_file)
        if exit_after_load:
            QTimer.singleShot(0, self.close)

    def _create_actions(self) -> None:
        file_menu = self.menuBar().addMenu("&File")
        open_action = QAction("&Open Schedule...", self)
        open_action.setShortcut(QKeySequence.StandardKey.Open)
        open_action.triggered.connect(self._open_schedule_dialog)
        file_menu.addAction(open_action)

        sample_action = QAction("Show &Sample", self)
        sample_action.triggered.connect(lambda: self.show_schedule(create_sample_schedule(), "sample"))
        file_menu.addAction(sample_action)

        view_menu = self.menuBar().addMenu("&View")
        reset_action = QAction("&Reset Zoom", self)
        reset_action.setShortcut(QKeySequence("Ctrl+0"))
        reset_action.triggered.connect(self.canvas.reset_view)
        view_menu.addAction(reset_action)

    def _open_schedule_dialog(self) -> None:
        path, _ = QFileDialog.getOpenFileName(self, "Open Schedule", "", "Schedule files (*.yaml *.yml)")
        if path:
            self.load_schedule_file(path)

    def load_schedule_file(self, path: str) -> bool:
        """Load a YAML schedule and show it; report failures in a dialog."""
        try:
            schedule = load_schedule(Path(path))
        except (OSError, yaml.YAMLError, ScheduleValidationError) as e:
            logger.error("Failed to load schedule %s: %s", path, e)
            show_load_error(self, path, e)
            return False
        self.show_schedule(schedule, path)
        return True

    def show_schedule(self, schedule: Schedule, source: str) -> None:
        self.canvas.setSchedule(schedule, source)

    def _on_schedule_loaded(self, event: ScheduleLoadedEvent) -> None:
        self.setWindowTitle(f"{UI.WINDOW_TITLE} - {Path(event.source).name}" if event.source else UI.WINDOW_TITLE)
        self._summary = schedule_summary(event.item_count, event.category_count)
        self._update_status()

    def _on_viewport_changed(self, event: ViewportChangedEvent) -> None:
        if event.zoom_changed:
            self._update_status()

    def _update_status(self) -> None:
        self.statusBar().showMessage(f"{self.canvas.zoom_indicator_text()} | {self._summary}")


def main() -> int:
    """Run the viewer application."""
    parser = argparse.ArgumentParser(description="StageGrid Schedule Viewer")
    parser.add_argument("--schedule", type=str, help="Load a YAML schedule on startup")
    parser.add_argument("--exit_after_load", action="store_true", help="Exit the application after loading completes (for automation/testing)")
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Logging verbosity")
    args = parser.parse_args()

    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    QApplication.setHighDpiScaleFactorRoundingPolicy(Qt.HighDpiScaleFactorRoundingPolicy.PassThrough)
    app = QApplication(sys.argv)
    app.setStyleSheet(qdarkstyle.load_stylesheet(palette=qdarkstyle.LightPalette))

    window = ScheduleViewerWindow(schedule_file=args.schedule, exit_after_load=args.exit_after_load)
    window.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
