from dataclasses import dataclass


@dataclass
class configData:
    expected_hz : float = 1.0
    history_capacity : int = 500
    max_devices : int = 1000
