import csv

from typing import Iterator, TextIO


class Dataset(object):
    """ A table of string values, the unit exchanged with the anonymization engine

    Attributes
        header              attribute names, in column order
        rows                records, each with one value per attribute
    """

    def __init__(self, header: list[str], rows: list[list[str]]):
        self.header = header
        self.rows = rows

    def __len__(self):
        return len(self.rows)

    def __iter__(self) -> Iterator[list[str]]:
        return iter(self.rows)


def read_dataset_from_stream(stream: TextIO, separator: str) -> Dataset:
    reader = csv.reader(stream, delimiter=separator)

    header = next(reader, None)
    if header is None:
        return Dataset([], [])

    rows = [row for row in reader if row]

    return Dataset(header, rows)


def read_dataset(path: str, separator: str) -> Dataset:
    with open(path, newline='', encoding='utf-8') as data_file:
        return read_dataset_from_stream(data_file, separator)


def write_dataset_to_stream(dataset: Dataset, stream: TextIO, separator: str):
    writer = csv.writer(stream, delimiter=separator, lineterminator='\n')

    writer.writerow(dataset.header)
    writer.writerows(dataset)


def write_dataset(dataset: Dataset, path: str, separator: str):
    with open(path, 'w', newline='', encoding='utf-8') as data_file:
        write_dataset_to_stream(dataset, data_file, separator)
