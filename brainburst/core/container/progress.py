"""Collaborators of the progress services that must be shared process-wide."""

from __future__ import annotations

from dependency_injector.containers import DeclarativeContainer
from dependency_injector.providers import Provider, Singleton

from brainburst.progress.lock import KeyedLock
from brainburst.progress.notifier import AssignmentNotifier, StoredNotifier


class ProgressContainer(DeclarativeContainer):
    locks: Provider[KeyedLock] = Singleton(KeyedLock)
    notifier: Provider[AssignmentNotifier] = Singleton(StoredNotifier)
