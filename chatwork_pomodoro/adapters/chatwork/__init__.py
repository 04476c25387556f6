"""Chatwork adapter."""

from chatwork_pomodoro.adapters.chatwork.client import ChatworkClient

__all__ = ["ChatworkClient"]
