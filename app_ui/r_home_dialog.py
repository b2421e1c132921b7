from __future__ import annotations

from typing import Optional

from PyQt6 import QtWidgets

from rintegration.installation import RInstallation
from rintegration.platform import PlatformSpecificRFunctions

from .r_home_selector import RHomeSelectorPanel


class RHomeSelectorDialog(QtWidgets.QDialog):
    """OK/Cancel/Reset shell around an :class:`RHomeSelectorPanel`."""

    def __init__(
        self,
        platform: PlatformSpecificRFunctions,
        *,
        warn_about_no_installations: bool = True,
        initial_installation: Optional[RInstallation] = None,
        panel: Optional[RHomeSelectorPanel] = None,
        parent: Optional[QtWidgets.QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle("Select R Installation")
        self.resize(620, 380)

        self.panel = panel or RHomeSelectorPanel(
            platform,
            warn_about_no_installations,
            initial_installation,
        )
        root = QtWidgets.QVBoxLayout(self)
        root.addWidget(self.panel, 1)

        self.buttons = QtWidgets.QDialogButtonBox(
            QtWidgets.QDialogButtonBox.StandardButton.Ok
            | QtWidgets.QDialogButtonBox.StandardButton.Cancel
            | QtWidgets.QDialogButtonBox.StandardButton.Reset
        )
        self.buttons.accepted.connect(self.accept)
        self.buttons.rejected.connect(self.reject)
        reset_btn = self.buttons.button(QtWidgets.QDialogButtonBox.StandardButton.Reset)
        if reset_btn is not None:
            reset_btn.clicked.connect(self.panel.reset)
        root.addWidget(self.buttons)

    def accept(self) -> None:
        if self.panel.apply():
            super().accept()

    def reject(self) -> None:
        if self.panel.cancel():
            super().reject()

