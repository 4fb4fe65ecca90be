from tokenledger.stdlib import safemath
from tokenledger import config


class OwnershipRegistry:
    def __init__(self, contract):
        self.owners = contract.hash('owners', default_value=config.NULL_ACCOUNT)
        self.counts = contract.hash('counts', default_value=0)

    def owner_of(self, token_id):
        return self.owners[token_id]

    def balance_of(self, owner):
        return self.counts[owner]

    def assign(self, token_id, to):
        self.owners[token_id] = to
        self.counts[to] = safemath.add(self.counts[to], 1)

    def reassign(self, token_id, sender, to):
        self.counts[sender] = safemath.sub(self.counts[sender], 1)
        self.counts[to] = safemath.add(self.counts[to], 1)
        self.owners[token_id] = to
