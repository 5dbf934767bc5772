from wifistudy.runtime.config import (
    ExperimentConfig,
    load_experiment_config,
    validate_config,
)

__all__ = ["ExperimentConfig", "load_experiment_config", "validate_config"]
