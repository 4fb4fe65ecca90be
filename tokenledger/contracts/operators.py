from tokenledger.stdlib import safemath


class OperatorRegistry:
    """
    Per-owner sets of operators with blanket transfer rights.

    Stored as an array with a reverse index so that membership checks and
    removals are O(1)::

        operator_count:<owner>              -> n
        operators:<owner>:<i>               -> operator, 0 <= i < n
        operator_index:<owner>:<operator>   -> i + 1, 0 if absent

    Removal moves the last entry into the freed slot, so order is not kept.
    """

    def __init__(self, contract):
        self.count = contract.hash('operator_count', default_value=0)
        self.entries = contract.hash('operators')
        self.index = contract.hash('operator_index', default_value=0)

    def is_operator(self, owner, operator):
        return self.index[owner, operator] > 0

    def operators_of(self, owner):
        return [self.entries[owner, i] for i in range(self.count[owner])]

    def add(self, owner, operator):
        if self.is_operator(owner, operator):
            return False

        n = self.count[owner]
        self.entries[owner, n] = operator
        self.index[owner, operator] = safemath.add(n, 1)
        self.count[owner] = safemath.add(n, 1)

        return True

    def remove(self, owner, operator):
        position = self.index[owner, operator]
        if position == 0:
            return False

        last = safemath.sub(self.count[owner], 1)
        slot = position - 1

        if slot != last:
            moved = self.entries[owner, last]
            self.entries[owner, slot] = moved
            self.index[owner, moved] = position

        self.entries[owner, last] = None
        self.index[owner, operator] = 0
        self.count[owner] = last

        return True
