import json
import logging
import sys

from os import getenv

from db_connectors.mysql_connector import MySQLConnector

from engines.arx_runner import ArxRunnerEngine

from interfaces.abstract_engine import AbstractEngine

from models.config import Config
from models.dataset import Dataset, read_dataset, read_dataset_from_stream, write_dataset, write_dataset_to_stream

from utils.config_processor import parse_config, parse_database, parse_separator
from utils.criteria_adapter import adapt_criteria
from utils.errors import CliError

import argparse


logger = logging.getLogger(__name__)


def str_to_bool(value: str) -> bool:
    if value.upper() in ("TRUE", "YES", "1"):
        return True
    if value.upper() in ("FALSE", "NO", "0"):
        return False

    raise argparse.ArgumentTypeError(f"expected TRUE or FALSE, got {value}")


parser = argparse.ArgumentParser('anonymization-cli', description="Anonymize a table according to a list of privacy criteria")

# attributes
parser.add_argument('-qi', '--quasiidentifying', type=str,
                    help="names of the quasi identifying attributes, delimited by ','")
parser.add_argument('-se', '--sensitive', type=str,
                    help="names of the sensitive attributes, delimited by ','")
parser.add_argument('-is', '--insensitive', type=str,
                    help="names of the insensitive attributes, delimited by ','")
parser.add_argument('-id', '--identifying', type=str,
                    help="names of the identifying attributes, delimited by ','")

parser.add_argument('-hi', '--hierarchies', type=str,
                    help="hierarchies for the attributes, delimited by ','. Syntax: [attributname1=filename1,attributname2=filename2]")
parser.add_argument('-d', '--datatype', type=str,
                    help="datatypes of the attributes, delimited by ','. Syntax: [attributname1=STRING|DECIMAL(format)|INTEGER|DATE(format)]")
parser.add_argument('-c', '--criteria', type=str,
                    help="anonymization criteria, delimited by ','. Syntax: [x-ANONYMITY,(x,y)-PRESENCE,INCLUSION,"
                         "attributname1=DISTINCT|ENTROPY|RECURSIVE-(x|x,y)-DIVERSITY,attributname2=HIERARCHICAL|EQUALDISTANCE-(x)-CLOSENESS]")

parser.add_argument('-m', '--metric', type=str,
                    help="information loss metric: AECS / DM / DMSTAR / ENTROPY / HEIGHT / NMENTROPY / PREC / NMPREC (default: ENTROPY)")
parser.add_argument('-s', '--suppression', type=float,
                    help="share of outliers that may be suppressed, e.g. 0.05 allows 5%% (default: 0.0)")
parser.add_argument('-pm', '--practicalmonotonicity', type=str_to_bool, nargs='?', const=True,
                    help="if present, practical monotonicity is assumed")

# input and output
parser.add_argument('-f', '--file', type=str,
                    help="filename of the input data, read from STDIN if neither a file nor a database is given")
parser.add_argument('-db', '--database', type=str,
                    help="table to read the input data from. Syntax: [TYPE=MYSQL,URL=value,PORT=value,USER=value,PASSWORD=value,DATABASE=value,TABLE=value]")
parser.add_argument('-o', '--output', type=str,
                    help="filename of the anonymized output, written to STDOUT if omitted")
parser.add_argument('-r', '--researchsubset', type=str,
                    help="research subset, given as a file or as a query on the input. Syntax: [FILE=filename|QUERY=querystring]")
parser.add_argument('-sp', '--separator', type=str,
                    help="separator used in the data and hierarchy files, or DETECT to guess it from the input file (default: ;)")

# environment
parser.add_argument('--runner', type=str,
                    help="path of the anonymization runner jar (default: $ARX_RUNNER)")
parser.add_argument('--java', type=str,
                    help="java executable used to start the runner (default: $ARX_JAVA or java)")
parser.add_argument('--config', type=str,
                    help="JSON file with default values for the options above, keyed by their long names")
parser.add_argument('-v', '--verbose', action='store_true',
                    help="log debug output")

DEFAULTS = {
    "metric": "ENTROPY",
    "suppression": 0.0,
    "separator": ";",
    "practicalmonotonicity": False,
    "java": "java",
}

ENVIRONMENT = {
    "runner": "ARX_RUNNER",
    "java": "ARX_JAVA",
}


def read_config(file_name: str) -> dict[str, str | float | bool]:
    with open(file_name, encoding='utf-8') as config_file:
        try:
            config = json.load(config_file)
        except json.JSONDecodeError as err:
            raise CliError(f"Invalid JSON in config file {file_name}: {err}") from err

    if not isinstance(config, dict):
        raise CliError(f"Config file {file_name} must contain a JSON object")

    return config


def merge_options(args: argparse.Namespace) -> dict:
    """ Defaults, overridden by the environment, the config file and the flags given on the command line, in that order """

    options = dict(DEFAULTS)
    options.update({name: getenv(variable) for name, variable in ENVIRONMENT.items() if getenv(variable)})

    if args.config:
        options.update(read_config(args.config))

    options.update({name: value for name, value in vars(args).items() if value is not None and name != "config"})

    return options


def setup_logging(verbose: bool):
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO,
                        format='%(asctime)s - %(levelname)s - %(name)s - %(message)s',
                        stream=sys.stderr)


def load_data(options: dict, separator: str) -> Dataset:
    """ Read the input table from the file, else from the database, else from STDIN """

    if options.get("file"):
        return read_dataset(options["file"], separator)

    database = parse_database(options.get("database"))
    if database is not None:
        connector = MySQLConnector(database)
        try:
            return connector.fetch_dataset()
        finally:
            connector.close()

    logger.info("Reading input data from STDIN")

    return read_dataset_from_stream(sys.stdin, separator)


def wire_up(options: dict) -> AbstractEngine:
    return ArxRunnerEngine(options.get("runner"), options.get("java") or "java")


def write_output(result: Dataset, options: dict, separator: str):
    if options.get("output"):
        write_dataset(result, options["output"], separator)
    else:
        write_dataset_to_stream(result, sys.stdout, separator)


def run_anonymization(options: dict, engine: AbstractEngine) -> Config:
    input_file = options.get("file")
    separator = parse_separator(options.get("separator"), input_file)

    config = parse_config(options, separator)

    # fail on missing hierarchies or subsets before any data is read
    adapt_criteria(config.criteria, config.gen_hiers, config.subset)

    data = load_data(options, separator)

    if options.get("output"):
        print(f"""Running anonymization
    - input: {input_file or options.get('database') or 'STDIN'} ({len(data)} records)
    - criteria: {[str(criterion) for criterion in config.criteria]}
    - metric: {config.metric.value}
    - suppression: {config.suppression}""")

    result = engine.anonymize(data, config)

    write_output(result, options, separator)

    if options.get("output"):
        print(f"Wrote {len(result)} records to {options['output']}")

    return config


def main(args: argparse.Namespace) -> int:
    setup_logging(args.verbose)

    try:
        options = merge_options(args)
        engine = wire_up(options)

        run_anonymization(options, engine)
    except (CliError, OSError) as err:
        print(err, file=sys.stderr)
        parser.print_usage(sys.stderr)
        return 1

    return 0


def run():
    sys.exit(main(parser.parse_args()))


if __name__ == '__main__':
    run()
