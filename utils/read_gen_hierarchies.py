import csv
import logging

from models.gentree import GenTree

from utils.errors import MalformedHierarchyFile


logger = logging.getLogger(__name__)


def read_gen_hierarchies(hierarchy_files: dict[str, str], separator: str) -> dict[str, GenTree]:
    """ Read the generalization hierarchy of every attribute from its file """

    # { key: value} where key is the attribute name, and the value is the root of the hierarchy tree
    qid_dict: dict[str, GenTree] = {}

    for attr_name, path in hierarchy_files.items():
        qid_dict[attr_name] = read_gen_hierarchy_file(path, separator)

        logger.info("Loaded hierarchy for %s from %s: %d values, %d levels",
                    attr_name, path, len(qid_dict[attr_name].leaves()), qid_dict[attr_name].height())

    return qid_dict


def read_gen_hierarchy_file(path: str, separator: str) -> GenTree:
    """ Read the hierarchy tree from the descriptor file

    Every row holds one original value followed by its generalizations, e.g. 34;30-39;*
    Column i is generalization level i, so a value may repeat across columns (Married;Married;*
    or Unknown;*;*). If the rows do not end in one common value, the top values hang below an
    unnamed root.
    """

    with open(path, newline='', encoding='utf-8') as tree_file:
        rows = [row for row in csv.reader(tree_file, delimiter=separator) if row]

    if not rows:
        raise MalformedHierarchyFile(path, "the file is empty")

    width = len(rows[0])
    for line_number, line_items in enumerate(rows, start=1):
        if len(line_items) != width:
            raise MalformedHierarchyFile(path, f"line {line_number} has {len(line_items)} levels, expected {width}")

    top_values = {line_items[-1] for line_items in rows}
    if len(top_values) == 1:
        root = GenTree(rows[0][-1])
        first_column = 1
    else:
        logger.debug("Hierarchy %s has %d top values", path, len(top_values))
        root = GenTree()
        first_column = 0

    for line_items in rows:
        # most general value first
        line_items = line_items[::-1]

        parent = root
        for i in range(first_column, width):
            node = parent.child(line_items[i])

            if node is None:
                node = GenTree(line_items[i], parent, is_leaf=(i == width - 1))

            parent = node

    return root
