"""Empty / error state templates and widget for list views.

A registry maps template keys to title + description (+ optional action
text). ``EmptyStateWidget`` renders one template and can be switched to
another at runtime, e.g. from ``no_candidates`` to ``no_matches`` when a
search filters everything out.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWidgets import QLabel, QPushButton, QVBoxLayout, QWidget

__all__ = [
    "EmptyStateTemplate",
    "EmptyStateRegistry",
    "empty_state_registry",
    "EmptyStateWidget",
]


@dataclass
class EmptyStateTemplate:
    key: str
    title: str
    description: str
    action_text: Optional[str] = None


class EmptyStateRegistry:
    def __init__(self) -> None:
        self._templates: Dict[str, EmptyStateTemplate] = {}
        for tpl in (
            EmptyStateTemplate(
                "no_candidates",
                "No Candidates",
                "No BAT-7 results have been loaded for this group yet.",
            ),
            EmptyStateTemplate(
                "no_matches",
                "No Matches",
                "No candidate matches the current search.",
                action_text="Clear search",
            ),
            EmptyStateTemplate(
                "sort_failed",
                "Sorting Unavailable",
                "The list could not be sorted and is shown in its original order.",
                action_text="Clear sorting",
            ),
        ):
            self.register(tpl)

    def register(self, template: EmptyStateTemplate) -> None:
        self._templates[template.key] = template

    def get(self, key: str) -> Optional[EmptyStateTemplate]:
        return self._templates.get(key)

    def all_keys(self) -> List[str]:
        return list(self._templates)


empty_state_registry = EmptyStateRegistry()


class EmptyStateWidget(QWidget):
    """Widget rendering a single ``EmptyStateTemplate``.

    Signals:
        actionRequested(str): the action button was clicked; carries the
            active template key.
    """

    actionRequested = pyqtSignal(str)

    def __init__(self, template_key: str, parent: Optional[QWidget] = None):
        super().__init__(parent)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 8, 0, 8)
        self.title_label = QLabel()
        self.title_label.setObjectName("emptyStateTitle")
        layout.addWidget(self.title_label)
        self.desc_label = QLabel()
        self.desc_label.setObjectName("emptyStateDesc")
        self.desc_label.setWordWrap(True)
        layout.addWidget(self.desc_label)
        self.action_button = QPushButton()
        self.action_button.setObjectName("emptyStateAction")
        self.action_button.clicked.connect(  # type: ignore
            lambda: self.actionRequested.emit(self._template_key)
        )
        layout.addWidget(self.action_button)
        layout.addStretch(1)
        self._template_key = template_key
        self.set_template(template_key)

    def template_key(self) -> str:
        return self._template_key

    def set_template(self, key: str) -> None:
        tpl = empty_state_registry.get(key) or EmptyStateTemplate(
            key, "Unavailable", "No template found."
        )
        self._template_key = key
        self.title_label.setText(tpl.title)
        self.desc_label.setText(tpl.description)
        self.action_button.setText(tpl.action_text or "")
        self.action_button.setVisible(bool(tpl.action_text))
