from __future__ import annotations


class GenTree(object):
    """Class for generalization hierarchies (Taxonomy Tree), tree nodes are stored in the instances.

    Attributes
        value              node value, None for the unnamed root above the top values of a hierarchy without a common root
        level              tree level (top is 0)
        num_of_leaves      number of leaf nodes covered
        ancestors          ancestor node list, direct parent first
        children           direct successor node list
        covered_nodes      all nodes covered by current node, the one closest to the top for repeated values
    """

    def __init__(self, value: str = None, parent: GenTree = None, is_leaf=False):
        self.value = value
        self.level = int(0)
        self.num_of_leaves = int(0)
        self.is_leaf = is_leaf
        self.ancestors: list[GenTree] = []
        self.children: list[GenTree] = []
        self.covered_nodes: dict[str, GenTree] = {}

        if value is not None:
            self.covered_nodes[value] = self

        if parent is not None:
            self.ancestors = parent.ancestors[:]
            # Push to the beginning of the array the direct parent of the node
            self.ancestors.insert(0, parent)
            self.level = parent.level + 1

            # Register oneself as a child of its direct parent
            parent.children.append(self)

            # Register oneself as a covered node of all of its ancestors
            for ancestor in self.ancestors:
                ancestor.covered_nodes.setdefault(self.value, self)
                if is_leaf:
                    ancestor.num_of_leaves += 1

    def node(self, value: str) -> GenTree | None:
        """ Look for a node with the parameter value."""

        return self.covered_nodes.get(value)

    def child(self, value: str) -> GenTree | None:
        """ Look for a direct child with the parameter value."""

        return next((child for child in self.children if child.value == value), None)

    def leaves(self) -> list[GenTree]:
        if self.is_leaf:
            return [self]

        return [leaf for child in self.children for leaf in child.leaves()]

    def height(self) -> int:
        """ Number of generalization levels below this node """

        if not self.children:
            return 0

        return 1 + max(child.height() for child in self.children)

    def to_table(self) -> list[list[str]]:
        """ One row per leaf, the leaf value followed by its generalizations up to the top value.

        This is the layout of the hierarchy files and the form the runner reads hierarchies in.
        """

        return [[leaf.value] + [ancestor.value for ancestor in leaf.ancestors if ancestor.value is not None]
                for leaf in self.leaves()]

    def __len__(self):
        return self.num_of_leaves
