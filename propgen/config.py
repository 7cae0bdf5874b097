from dataclasses import dataclass

@dataclass(frozen=True)
class EngineConfig:
    log_level: str = "INFO"
    seed: int = 1  # repeatable generation
    default_sample_count: int = 100
    default_null_probability: float = 0.2
    max_shrink_rounds: int = 1000
