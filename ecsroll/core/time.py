__all__ = ["Time"]


import time


class Time:
    @staticmethod
    def now() -> float:
        timestamp = time.time()
        return timestamp

    @staticmethod
    def sleep(seconds: float) -> None:
        time.sleep(seconds)
