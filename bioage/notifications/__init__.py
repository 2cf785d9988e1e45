"""Notification package for user-facing workflow outcomes."""

from .sink import (
	BUSY_MESSAGE,
	FAILURE_MESSAGE,
	SUCCESS_MESSAGE,
	InMemoryNotificationSink,
	LoggingNotificationSink,
	NotificationKind,
	NotificationMessage,
	NotificationRecord,
	NotificationSink,
	notification_send,
)

__all__ = [
	"BUSY_MESSAGE",
	"FAILURE_MESSAGE",
	"SUCCESS_MESSAGE",
	"InMemoryNotificationSink",
	"LoggingNotificationSink",
	"NotificationKind",
	"NotificationMessage",
	"NotificationRecord",
	"NotificationSink",
	"notification_send",
]
