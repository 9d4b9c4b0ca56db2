from .subscriber import SubscriberMiddleware

__all__ = ["SubscriberMiddleware"]
