import logging
from importlib.resources import as_file, files
from pathlib import Path
from pprint import pformat

import numpy as np
import tqdm
import typer
import yaml

from mcdiffusion.basic_simulators.simulator import simulator
from mcdiffusion.config import get_default_sim_options, update_sim_options
from mcdiffusion.exceptions import ConfigurationError

app = typer.Typer(add_completion=False)

OUTPUT_STEM = "simulated_data"


def _lower_keys(d):
    if isinstance(d, dict):
        return {str(k).lower(): _lower_keys(v) for k, v in d.items()}
    return d


def try_gen_folder(folder: str | Path | None = None) -> None:
    """Create a folder (and parents) if it does not exist yet."""
    if not folder:
        raise ValueError("Folder path cannot be None or empty.")
    Path(folder).mkdir(parents=True, exist_ok=True)
    logging.info("Folder %s created or already exists.", folder)


def get_basic_config_from_yaml(yaml_config_path) -> dict:
    """Load the YAML configuration with all keys lower-cased."""
    # Handle both file paths and file-like objects (makes mock testing easier)
    if hasattr(yaml_config_path, "read"):
        basic_config_from_yaml = yaml.safe_load(yaml_config_path)
    else:
        with open(yaml_config_path, "rb") as f:
            basic_config_from_yaml = yaml.safe_load(f)
    return _lower_keys(basic_config_from_yaml or {})


# YAML 1.1 reads exponent-only floats such as 1e-3 as strings.
_NUMERIC_FIELDS = {"delta_t": float, "max_t": float, "trials": int, "random_state": int}


def _coerce_number(key: str, value):
    cast = _NUMERIC_FIELDS.get(key)
    if cast is None or value is None or not isinstance(value, str):
        return value
    try:
        number = float(value)
    except ValueError:
        raise ConfigurationError(
            f"SIMULATOR.{key.upper()} must be a number, got {value!r}"
        ) from None
    if cast is int and number.is_integer():
        return int(number)
    return number


def collect_sim_config(yaml_config_path) -> tuple[np.ndarray, dict]:
    """Get coherence levels and simulation options from a YAML file.

    Returns
    -------
    tuple[np.ndarray, dict]
        Signed coherence levels and the simulation options.
    """
    bc = get_basic_config_from_yaml(yaml_config_path)
    if "coherence" not in bc:
        raise ValueError("Configuration file must define COHERENCE.")

    overrides = {}
    for key, value in bc.get("simulator", {}).items():
        overrides[key] = _coerce_number(key, value)
    if "theta" in bc:
        overrides["theta"] = bc["theta"]
    for which in ("up", "lower"):
        boundary = bc.get(f"{which}_boundary")
        if boundary is None:
            continue
        if "profile" in boundary:
            overrides[f"{which}_boundary"] = boundary["profile"]
        if "params" in boundary:
            overrides[f"{which}_boundary_params"] = list(boundary["params"])

    sim_options = update_sim_options(get_default_sim_options(), **overrides)
    return np.asarray(bc["coherence"], dtype=np.float64), sim_options


def _options_record(sim_options: dict, coherence: np.ndarray) -> dict:
    """Options in a YAML-safe form."""
    theta = sim_options["theta"]
    if isinstance(theta, dict):
        theta = {k: float(v) for k, v in theta.items()}
    else:
        theta = [float(v) for v in np.ravel(theta)]
    record = {
        "coherence": [float(c) for c in coherence],
        "delta_t": float(sim_options["delta_t"]),
        "max_t": float(sim_options["max_t"]),
        "trials": int(sim_options["trials"]),
        "random_state": int(sim_options["random_state"]),
        "theta": theta,
    }
    for which in ("up", "lower"):
        boundary = sim_options[f"{which}_boundary"]
        record[f"{which}_boundary"] = getattr(boundary, "name", boundary)
        record[f"{which}_boundary_params"] = [
            float(b) for b in np.ravel(sim_options[f"{which}_boundary_params"])
        ]
    return record


def run_simulations(
    coherence: np.ndarray, sim_options: dict, output: Path, n_files: int = 1
) -> list[Path]:
    """Simulate ``n_files`` data sets and write them to ``output``.

    File k uses seed ``random_state + k`` when a seed is configured, and a
    freshly generated seed otherwise. Each CSV is accompanied by a YAML file
    recording the options used.

    Returns
    -------
    list[Path]
        Paths of the written CSV files.
    """
    logger = logging.getLogger(__name__)
    try_gen_folder(output)
    base_seed = sim_options["random_state"]

    written = []
    for k in tqdm.tqdm(range(n_files), desc="Generating simulated data files", unit="file"):
        run_options = dict(sim_options)
        run_options["random_state"] = None if base_seed is None else int(base_seed) + k
        result = simulator(coherence, run_options)

        csv_path = Path(output) / f"{OUTPUT_STEM}_{k}.csv"
        yaml_path = Path(output) / f"{OUTPUT_STEM}_{k}.yaml"
        result.to_dataframe().to_csv(csv_path, index=False)
        with open(yaml_path, "w") as f:
            yaml.safe_dump(_options_record(result.sim_options, coherence), f, sort_keys=False)

        logger.info(
            "Wrote %s (random_state=%s, %d undecided of %d)",
            csv_path,
            result.sim_options["random_state"],
            int(result.undecided.sum()),
            len(result),
        )
        written.append(csv_path)
    return written


log_level_option = typer.Option(
    "WARNING",
    "--log-level",
    "-l",
    help="Set the logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).",
    case_sensitive=False,
    show_default=True,
    rich_help_panel="Logging",
    metavar="LEVEL",
    autocompletion=lambda: ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
)

epilog = "Example: `mcdiffusion-simulate --config-path myconfig.yaml --output ./output --n-files 10 --log-level INFO`"


@app.command(epilog=epilog)
def main(
    config_path: Path = typer.Option(None, help="Path to the YAML configuration file."),
    output: Path = typer.Option(..., help="Path to the output directory."),
    n_files: int = typer.Option(
        1,
        "--n-files",
        "-n",
        help="Number of data sets to generate.",
        min=1,
        show_default=True,
    ),
    log_level: str = log_level_option,
):
    """
    Simulate choice and reaction-time data using the specified configuration.
    """
    logging.basicConfig(
        level=log_level.upper(), format="%(asctime)s - %(levelname)s - %(message)s"
    )
    logger = logging.getLogger(__name__)

    if config_path is None:
        logger.warning("No config path provided, using default configuration.")
        with as_file(files("mcdiffusion.cli") / "config_simulation.yaml") as default_config:
            coherence, sim_options = collect_sim_config(default_config)
    else:
        coherence, sim_options = collect_sim_config(config_path)

    logger.debug("SIMULATION OPTIONS")
    logger.debug(pformat(sim_options))

    written = run_simulations(coherence, sim_options, output, n_files=n_files)
    logger.info("Newly generated files: %s", written)
    logger.info("Data generation finished")


if __name__ == "__main__":
    app()
