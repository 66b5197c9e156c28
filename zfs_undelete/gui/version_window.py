"""PyQt5 dialog for picking the version of a file to restore."""

from pathlib import Path, PurePath
from typing import List, Optional

from PyQt5.QtWidgets import (QDialog, QVBoxLayout, QHBoxLayout, QPushButton, QLabel,
                             QListWidget, QListWidgetItem, QTextEdit, QMessageBox)
from PyQt5.QtCore import Qt

from ..errors import UndeleteError
from ..prompts import format_version
from ..utils.logger import UndeleteLogger
from ..zfs_engine.dataset import Dataset
from ..zfs_engine.restorer import SnapshotRestorer
from ..zfs_engine.versions import FileVersion


class VersionWindow(QDialog):
    """Lists the distinct versions of a file and restores the selected one."""

    def __init__(self, dataset: Dataset, relative_path: PurePath, versions: List[FileVersion],
                 restorer: SnapshotRestorer, logger: UndeleteLogger, dry_run: bool = False):
        """
        Initialize version window.

        Args:
            dataset: Resolved dataset
            relative_path: Path of the file relative to the dataset root
            versions: Distinct versions, newest first
            restorer: Performs the copy
            logger: Logger instance, its entries are shown in the log pane
            dry_run: If True, only log what would be copied
        """
        super().__init__()
        self.dataset = dataset
        self.relative_path = relative_path
        self.versions = versions
        self.restorer = restorer
        self.logger = logger
        self.dry_run = dry_run
        self.restored_path: Optional[Path] = None

        self.init_ui()
        self.update_log_display()

    def init_ui(self):
        """Initialize UI components."""
        self.setWindowTitle("zfs-undelete")
        self.setGeometry(100, 100, 800, 500)

        main_layout = QVBoxLayout()
        self.setLayout(main_layout)

        target_label = QLabel(f"Restore: {self.dataset.get_absolute_path(self.relative_path)}")
        target_label.setTextInteractionFlags(Qt.TextSelectableByMouse)
        main_layout.addWidget(target_label)

        # Newest version first, same order as the terminal chooser
        self.version_list = QListWidget()
        for index, version in enumerate(self.versions):
            item = QListWidgetItem(format_version(index, version))
            item.setToolTip(self.restorer.list_entry(version.snapshot.join(self.relative_path)))
            self.version_list.addItem(item)
        if self.versions:
            self.version_list.setCurrentRow(0)
        self.version_list.itemDoubleClicked.connect(self.restore_selected)
        main_layout.addWidget(self.version_list)

        button_layout = QHBoxLayout()
        self.restore_btn = QPushButton("Restore")
        self.restore_btn.clicked.connect(self.restore_selected)
        self.cancel_btn = QPushButton("Cancel")
        self.cancel_btn.clicked.connect(self.reject)
        button_layout.addWidget(self.restore_btn)
        button_layout.addWidget(self.cancel_btn)
        button_layout.addStretch()
        main_layout.addLayout(button_layout)

        self.status_label = QLabel("Select a version")
        main_layout.addWidget(self.status_label)

        main_layout.addWidget(QLabel("Log:"))
        self.log_text_edit = QTextEdit()
        self.log_text_edit.setReadOnly(True)
        self.log_text_edit.setFontFamily("Courier")
        main_layout.addWidget(self.log_text_edit)

    def restore_selected(self):
        """Restore the selected version."""
        row = self.version_list.currentRow()
        if row < 0:
            QMessageBox.warning(self, "Error", "Please select a version.")
            return

        version = self.versions[row]
        try:
            self.restored_path = self.restorer.restore_version(
                self.dataset, self.relative_path, version.snapshot, dry_run=self.dry_run
            )
        except UndeleteError as e:
            self.logger.error(str(e))
            self.update_log_display()
            self.status_label.setText(f"Restore failed: {e}")
            QMessageBox.critical(self, "Restore Error", f"Restore failed:\n{e}")
            return

        self.update_log_display()
        self.status_label.setText(f"Restored from {version.snapshot.name}")
        QMessageBox.information(self, "Restore Complete",
                                f"Restored {self.restored_path}\nfrom snapshot {version.snapshot.name}")
        self.accept()

    def update_log_display(self):
        """Update log display from logger."""
        log_text = self.logger.get_log_text()
        if log_text:
            self.log_text_edit.setPlainText(log_text)
