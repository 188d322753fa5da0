import logging

from os import getenv

import mysql.connector

import tqdm

from models.database_spec import DatabaseSpec, DatabaseType
from models.dataset import Dataset

from utils.errors import DatabaseError, UnsupportedDatabase


logger = logging.getLogger(__name__)

BATCH_SIZE = 1000


class MySQLConnector(object):
    """ Reads the table to anonymize from a MySQL database """

    def __init__(self, spec: DatabaseSpec):
        if spec.type != DatabaseType.MYSQL:
            raise UnsupportedDatabase(spec.type.value)

        self.TABLE_NAME = spec.table

        connection_args = {
            "host": spec.host,
            "user": spec.user or getenv('MYSQL_USER'),
            "password": spec.password or getenv('MYSQL_PASSWORD'),
            "database": spec.database,
        }
        if spec.port is not None:
            connection_args["port"] = spec.port

        logger.info("Connecting to %s", spec)

        try:
            self.mysql_client = mysql.connector.connect(**connection_args)
        except mysql.connector.Error as err:
            raise DatabaseError(f"Could not connect to {spec}: {err}") from err

    def get_document_count(self) -> int:
        with self.mysql_client.cursor() as cursor:
            cursor.execute(f"SELECT COUNT(*) FROM `{self.TABLE_NAME}`")
            count = cursor.fetchone()

        return count[0]

    def fetch_dataset(self) -> Dataset:
        """ Load the whole table, values converted to strings, NULL to the empty string """

        try:
            return self._fetch_dataset()
        except mysql.connector.Error as err:
            raise DatabaseError(f"Could not read table {self.TABLE_NAME}: {err}") from err

    def _fetch_dataset(self) -> Dataset:
        total = self.get_document_count()

        rows: list[list[str]] = []

        with self.mysql_client.cursor() as cursor:
            cursor.execute(f"SELECT * FROM `{self.TABLE_NAME}`")

            header = [column[0] for column in cursor.description]

            progress = tqdm.tqdm(unit="rows", total=total)

            batch = cursor.fetchmany(BATCH_SIZE)
            while batch:
                rows.extend(["" if value is None else str(value) for value in record] for record in batch)
                progress.update(len(batch))

                batch = cursor.fetchmany(BATCH_SIZE)

            progress.close()

        logger.info("Fetched %d/%d records from %s", len(rows), total, self.TABLE_NAME)

        return Dataset(header, rows)

    def close(self):
        self.mysql_client.close()
