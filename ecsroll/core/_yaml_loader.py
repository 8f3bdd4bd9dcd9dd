import yaml

from .exceptions import ConfigurationError


class YamlLoader:
    @staticmethod
    def load(path: str) -> dict:
        try:
            with open(path, "r") as file:
                data = yaml.load(file, Loader=yaml.FullLoader)
        except FileNotFoundError:
            raise ConfigurationError(f"Config file {path} not found.")
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Could not parse {path}: {e}")
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Config file {path} must contain a mapping."
            )
        return data
