import json
import logging
import os
import shutil
import subprocess
import tempfile

from interfaces.abstract_engine import AbstractEngine

from models.config import Config
from models.dataset import Dataset, read_dataset, write_dataset

from utils.criteria_adapter import adapt_criteria
from utils.errors import EngineError


logger = logging.getLogger(__name__)

MANIFEST_VERSION = "1"


def build_manifest(config: Config, input_path: str, output_path: str) -> dict:
    """ Describe one anonymization job in the JSON format read by the runner """

    attributes = []
    for attr_name, role in config.attribute_roles().items():
        attribute = {"name": attr_name, "role": role}

        if attr_name in config.data_types:
            attribute["data_type"] = config.data_types[attr_name].to_dict()

        if role == "QUASI_IDENTIFYING":
            attribute["hierarchy"] = config.gen_hiers[attr_name].to_table()

        attributes.append(attribute)

    return {
        "version": MANIFEST_VERSION,
        "input": {
            "path": input_path,
            "separator": config.separator,
            "encoding": "utf-8",
            "has_header": True,
        },
        "output": {
            "path": output_path,
            "overwrite": True,
        },
        "attributes": attributes,
        "privacy": {
            "criteria": adapt_criteria(config.criteria, config.gen_hiers, config.subset),
            "suppression_limit": config.suppression,
        },
        "subset": config.subset.to_dict() if config.subset is not None else None,
        "algorithm": {
            "metric": config.metric.value,
            "practical_monotonicity": config.practical_monotonicity,
        },
    }


class ArxRunnerEngine(AbstractEngine):
    """ Runs the anonymization in the external runner: java -jar <runner> <manifest> """

    def __init__(self, runner_path: str, java: str = "java"):
        self.runner_path = runner_path
        self.java = java

    def command(self, manifest_path: str) -> list[str]:
        return [self.java, "-jar", self.runner_path, manifest_path]

    def anonymize(self, data: Dataset, config: Config) -> Dataset:
        if not self.runner_path or not os.path.isfile(self.runner_path):
            raise EngineError(f"Anonymization runner not found: {self.runner_path}")

        if shutil.which(self.java) is None:
            raise EngineError(f"Java executable not found: {self.java}")

        with tempfile.TemporaryDirectory(prefix="anonymization-") as work_dir:
            input_path = os.path.join(work_dir, "input.csv")
            output_path = os.path.join(work_dir, "output.csv")
            manifest_path = os.path.join(work_dir, "manifest.json")

            write_dataset(data, input_path, config.separator)

            manifest = build_manifest(config, input_path, output_path)
            with open(manifest_path, 'w', encoding='utf-8') as manifest_file:
                json.dump(manifest, manifest_file, ensure_ascii=False, indent=2)

            command = self.command(manifest_path)
            logger.info("Running %s", " ".join(command))

            process = subprocess.run(command, stdout=subprocess.PIPE, stderr=subprocess.STDOUT, text=True)
            logger.debug("Runner output:\n%s", process.stdout)

            if process.returncode != 0:
                raise EngineError(f"Anonymization runner failed with exit code {process.returncode}:\n{process.stdout}")

            if not os.path.isfile(output_path):
                raise EngineError("Anonymization runner did not produce an output table")

            return read_dataset(output_path, config.separator)
