class Provider:
    def __init__(self, **kwargs):
        for key, value in kwargs.items():
            setattr(self, key, value)

    def __setup__(self) -> None:
        pass

    def close(self) -> None:
        pass
