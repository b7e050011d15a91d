"""
Run-time defaults for the Louvain engine and the command line tool.

Values can be overridden from a YAML file, see ``load_run_config``.
"""

import logging
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

# Minimum modularity increase for a pass of the local optimizer to count.
EPSILON = 1e-7
# Hard bound on optimizer passes per level, independent of EPSILON.
MAX_PASSES = 1000
DEFAULT_SEED = None

RESULTS_DIR = "results"

DEFAULTS = {
    "epsilon": EPSILON,
    "max_passes": MAX_PASSES,
    "seed": DEFAULT_SEED,
    "output_dir": RESULTS_DIR,
    "plot": False,
    "log_level": "INFO",
}


def load_run_config(path=None):
    """
    Load a run configuration, falling back to ``DEFAULTS`` for missing keys.

    Parameters
    ----------
    path : str or Path, optional
        YAML file with a flat mapping of keys from ``DEFAULTS``. ``None``
        returns a copy of the defaults.

    Returns
    -------
    dict
        The merged configuration.
    """
    cfg = dict(DEFAULTS)
    if path is None:
        return cfg

    path = Path(path)
    with path.open("r") as cf:
        loaded = yaml.safe_load(cf) or {}
    if not isinstance(loaded, dict):
        raise ValueError(f"{path}: expected a mapping at the top level")

    unknown = sorted(set(loaded) - set(DEFAULTS))
    if unknown:
        raise ValueError(f"{path}: unknown configuration keys {unknown}")

    cfg.update(loaded)
    if float(cfg["epsilon"]) < 0:
        raise ValueError(f"{path}: epsilon must be non-negative")
    if int(cfg["max_passes"]) < 1:
        raise ValueError(f"{path}: max_passes must be at least 1")
    logger.info("Loaded run configuration from %s", path)
    return cfg
