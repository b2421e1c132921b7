from __future__ import annotations

from concurrent import futures
from enum import Enum
from pathlib import Path
from typing import Callable, List, Optional

from PyQt6 import QtCore, QtGui, QtWidgets

from app_ui.ui_helpers.text_wrap import DEFAULT_DIALOG_COLUMN_COUNT, wrap_text
from diagnostics.logging_setup import get_logger
from rintegration import versions
from rintegration.installation import LaunchUsing, RInstallation, RLaunchConfiguration
from rintegration.platform import PlatformSpecificRFunctions
from rintegration.scanner import RInstallationScanner

LOG = get_logger("r_home_selector")

LEVEL_ERROR = "error"
LEVEL_WARNING = "warning"

# (parent, title, message, level)
MessagePresenter = Callable[[QtWidgets.QWidget, str, str, str], None]
# (parent, title) -> chosen directory or None
DirectoryChooser = Callable[[QtWidgets.QWidget, str], Optional[Path]]


def show_message_box(parent: QtWidgets.QWidget, title: str, message: str, level: str) -> None:
    text = wrap_text(message, DEFAULT_DIALOG_COLUMN_COUNT)
    if level == LEVEL_WARNING:
        QtWidgets.QMessageBox.warning(parent, title, text)
    else:
        QtWidgets.QMessageBox.critical(parent, title, text)


def choose_directory(parent: QtWidgets.QWidget, title: str) -> Optional[Path]:
    selected = QtWidgets.QFileDialog.getExistingDirectory(
        parent,
        title,
        "",
        QtWidgets.QFileDialog.Option.ShowDirsOnly,
    )
    return Path(selected) if selected else None


class TableColumn(Enum):
    """Table columns, in display order."""

    VERSION = "Version"
    R_HOME = "R Home Directory"


class RHomesTableCell:
    """One installation seen through one table column."""

    def __init__(self, installation: RInstallation, column: TableColumn) -> None:
        self.installation = installation
        self.column = column

    def text(self) -> str:
        if self.column is TableColumn.R_HOME:
            return str(self.installation.r_home_directory.absolute())
        if self.column is TableColumn.VERSION:
            return self.installation.r_version or "?"
        LOG.error("no text for R home table column %s", self.column)
        return "?"

    def __str__(self) -> str:
        return self.text()


class RHomeSelectorPanel(QtWidgets.QWidget):
    """
    Lets the user pick an R home from the detected installations, browse for
    one, or fall back to the environment's R_HOME/PATH.

    A surrounding dialog drives ``apply``/``cancel``/``reset``; any other
    thread can block on ``get_selected_launch_configuration`` until the user
    finishes.
    """

    selection_edited = QtCore.pyqtSignal()

    def __init__(
        self,
        platform: PlatformSpecificRFunctions,
        warn_about_no_installations: bool,
        initial_installation: Optional[RInstallation] = None,
        *,
        scanner: Optional[RInstallationScanner] = None,
        message_presenter: Optional[MessagePresenter] = None,
        directory_chooser: Optional[DirectoryChooser] = None,
        parent: Optional[QtWidgets.QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self._platform = platform
        self._scanner = scanner or RInstallationScanner()
        self._present_message = message_presenter or show_message_box
        self._choose_directory = directory_chooser or choose_directory
        self._warn_about_no_installations = bool(warn_about_no_installations)
        self._future: futures.Future = futures.Future()
        self._selected_row = -1
        self._installations: List[RInstallation] = []

        self._build_ui()
        self._post_ui_initialize(initial_installation)

    # --- construction --------------------------------------------------------
    def _build_ui(self) -> None:
        layout = QtWidgets.QVBoxLayout(self)

        self.inherit_checkbox = QtWidgets.QCheckBox("Use Environment Variables (Not Recommended)")
        self.inherit_checkbox.toggled.connect(self._on_inherit_toggled)
        layout.addWidget(self.inherit_checkbox)

        self.detected_label = QtWidgets.QLabel("Detected R Installations:")
        layout.addWidget(self.detected_label)

        self.table = QtWidgets.QTableWidget(0, len(TableColumn))
        self.table.setHorizontalHeaderLabels([column.value for column in TableColumn])
        self.table.setEditTriggers(QtWidgets.QAbstractItemView.EditTrigger.NoEditTriggers)
        self.table.setSelectionBehavior(QtWidgets.QAbstractItemView.SelectionBehavior.SelectRows)
        self.table.setSelectionMode(QtWidgets.QAbstractItemView.SelectionMode.SingleSelection)
        self.table.verticalHeader().setVisible(False)
        self.table.horizontalHeader().setStretchLastSection(True)
        self.table.setMinimumHeight(200)
        layout.addWidget(self.table, 1)

        row = QtWidgets.QHBoxLayout()
        self.r_home_label = QtWidgets.QLabel("R Home:")
        self.r_home_field = QtWidgets.QLineEdit()
        self.r_home_field.textEdited.connect(self._on_r_home_text_edited)
        self.browse_button = QtWidgets.QPushButton("Browse...")
        self.browse_button.clicked.connect(self._on_browse_clicked)
        row.addWidget(self.r_home_label)
        row.addWidget(self.r_home_field, 1)
        row.addWidget(self.browse_button)
        layout.addLayout(row)

    def _post_ui_initialize(self, initial_installation: Optional[RInstallation]) -> None:
        LOG.debug("initializing R home selector with initial installation: %s", initial_installation)
        self._installations = list(self._scanner.scan_for_r_installations(self._platform))

        self.table.setRowCount(len(self._installations))
        for row, installation in enumerate(self._installations):
            for col, column in enumerate(TableColumn):
                cell = RHomesTableCell(installation, column)
                item = QtWidgets.QTableWidgetItem(cell.text())
                item.setData(QtCore.Qt.ItemDataRole.UserRole, row)
                item.setToolTip(str(installation.r_home_directory))
                self.table.setItem(row, col, item)

        if initial_installation is not None:
            for row, installation in enumerate(self._installations):
                if installation == initial_installation:
                    self.table.selectRow(row)
                    self._selected_row = row
                    break
            self._set_selected_r_home(initial_installation.r_home_directory)

        # hooked up after the initial selection so it doesn't count as an edit
        self.table.selectionModel().selectionChanged.connect(self._on_table_selection_changed)

        version_col = list(TableColumn).index(TableColumn.VERSION)
        self.table.setColumnWidth(version_col, 90)

    # --- public API ----------------------------------------------------------
    @property
    def installations(self) -> List[RInstallation]:
        return list(self._installations)

    def apply(self) -> bool:
        """Finish with the current settings. False means validation failed and the panel stays."""
        if self._inherit_from_environment():
            self._complete(RLaunchConfiguration(LaunchUsing.ENVIRONMENT, None))
            return True

        installation = self._validated_selected_r_home()
        if installation is None:
            return False
        self._complete(RLaunchConfiguration(LaunchUsing.SELECTED_INSTALLATION, installation))
        return True

    def cancel(self) -> bool:
        self._complete(None)
        return True

    def reset(self) -> None:
        """Start over: a new decision can be delivered and the form is cleared."""
        if self._future.done():
            self._future = futures.Future()
        self.table.clearSelection()
        self._selected_row = -1
        self.r_home_field.setText("")

    def get_selected_launch_configuration(
        self, timeout: Optional[float] = None
    ) -> Optional[RLaunchConfiguration]:
        """
        Block until the user accepts or cancels. Returns None on cancel, or if
        waiting fails (for instance when ``timeout`` runs out).
        """
        future = self._future
        try:
            return future.result(timeout=timeout)
        except (futures.TimeoutError, futures.CancelledError) as exc:
            LOG.error("failed while blocking for the selected launch configuration: %r", exc)
            return None

    def is_decision_made(self) -> bool:
        return self._future.done()

    def no_installations_message(self) -> str:
        roots = ", ".join(str(root) for root in self._platform.get_expected_install_roots())
        return (
            "Could not find any R installations in the default installation "
            f"directory(s): {roots}. If you know the location of an existing "
            "installation you can use the browse button to locate it. Otherwise, "
            "you should cancel and restart the application after installing R."
        )

    # --- Qt events -----------------------------------------------------------
    def showEvent(self, event: QtGui.QShowEvent) -> None:
        super().showEvent(event)
        if self.table.rowCount() == 0 and self._warn_about_no_installations:
            self._warn_about_no_installations = False
            QtCore.QTimer.singleShot(0, self._show_no_installations_warning)

    def _show_no_installations_warning(self) -> None:
        self._present_message(
            self,
            "No R Installations Detected",
            self.no_installations_message(),
            LEVEL_WARNING,
        )

    # --- handlers ------------------------------------------------------------
    def _on_table_selection_changed(self, *_args) -> None:
        rows = self.table.selectionModel().selectedRows()
        new_row = rows[0].row() if rows else -1
        if new_row == self._selected_row:
            return
        self._selected_row = new_row
        if new_row >= 0:
            LOG.debug("newly selected R home row is: %d", new_row)
            item = self.table.item(new_row, 0)
            index = item.data(QtCore.Qt.ItemDataRole.UserRole) if item else new_row
            self._set_selected_r_home(self._installations[int(index)].r_home_directory)
        else:
            self._set_selected_r_home(None)

    def _on_inherit_toggled(self, checked: bool) -> None:
        enabled = not checked
        for widget in (
            self.detected_label,
            self.table,
            self.r_home_label,
            self.r_home_field,
            self.browse_button,
        ):
            widget.setEnabled(enabled)
        self._edits_occurred()

    def _on_browse_clicked(self) -> None:
        chosen = self._choose_directory(self, "Select an R Home Directory")
        if chosen is None:
            return
        self._set_selected_r_home(Path(chosen))
        self._edits_occurred()

    def _on_r_home_text_edited(self, _text: str) -> None:
        self._edits_occurred()

    def _edits_occurred(self) -> None:
        if self._future.done():
            self._future = futures.Future()
        self.selection_edited.emit()

    # --- helpers -------------------------------------------------------------
    def _inherit_from_environment(self) -> bool:
        return self.inherit_checkbox.isChecked()

    def _complete(self, value: Optional[RLaunchConfiguration]) -> None:
        future = self._future
        if future.done():
            return
        try:
            future.set_result(value)
        except futures.InvalidStateError as exc:
            LOG.error("failed to set the selected launch configuration: %r", exc)

    def _selected_r_home(self) -> Optional[Path]:
        text = self.r_home_field.text().strip()
        if not text:
            return None
        return Path(text)

    def _set_selected_r_home(self, directory: Optional[Path]) -> None:
        if directory is None:
            self.r_home_field.setText("")
        else:
            self.r_home_field.setText(str(Path(directory).absolute()))

    def _error(self, title: str, message: str) -> None:
        self._present_message(self, title, message, LEVEL_ERROR)

    def _validated_selected_r_home(self) -> Optional[RInstallation]:
        selected = self._selected_r_home()
        if selected is None:
            self._error(
                "No R Home selected",
                "Please either enter or select an R Home directory.",
            )
            return None

        installation = self._scanner.r_home_directory_to_r_installation(self._platform, selected)
        if installation is None:
            message = (
                "Failed to detect an R installation at the R Home selected "
                f'"{selected.absolute()}".'
            )
            self._error("Invalid R Home", message)
            LOG.debug("user error: %s", message)
            return None

        supported = self._platform.get_supported_r_super_versions()
        if not supported:
            message = "Internal error. No known supported R versions."
            self._error("Internal Error", message)
            LOG.error("%s (%r)", message, supported)
            return None

        if installation.r_version is None:
            message = (
                "Could not determine an R version for the selected R Home: "
                f"{installation.r_home_directory}"
            )
            self._error("Unknown R Version", message)
            LOG.warning(message)
            return None

        comparator = versions.get_instance()
        if not comparator.are_any_super_version_of(supported, installation.r_version):
            accepted = ", ".join(f"{version}.*" for version in supported)
            message = (
                f"The selected R Home (version {installation.r_version}) does not "
                f"appear to match any of the supported R versions: {accepted}"
            )
            self._error("Unsupported R Version", message)
            LOG.warning("user error: %s", message)
            return None

        return installation
