from .models import Event, EventListener, SingletonEventListener
from .manager import EventManager

__all__ = ['Event', 'EventListener', 'SingletonEventListener', 'EventManager']
