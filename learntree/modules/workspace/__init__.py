"""Workspace state exports."""

from .state import Workspace, WorkspaceManager, workspace_manager

__all__ = ["Workspace", "WorkspaceManager", "workspace_manager"]
