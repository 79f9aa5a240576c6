from ratopoly.services.session import GameSession, RecordedInput, replay

__all__ = ["GameSession", "RecordedInput", "replay"]
