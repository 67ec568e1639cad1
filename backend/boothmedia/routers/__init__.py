from . import capture_routers, notification_routers, video_routers

__all__ = ["capture_routers", "notification_routers", "video_routers"]
