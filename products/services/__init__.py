from .panhandler import Panhandler

__all__ = ["Panhandler"]
