"""
detectIA GUI Integration Module
===============================

State handling for the analyzer page.

Key Components:
- InteractionController: mount / submit / clear lifecycle
- ViewState: immutable snapshot handed to the renderer
"""

from .controller import (
    InteractionController,
    ConfigurationStatus,
    ViewState,
    MESSAGES
)
