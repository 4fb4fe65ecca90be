from tokenledger.exceptions import InsufficientBalance
from tokenledger.stdlib import safemath


class BalanceLedger:
    """
    Account balances and the supply they sum to.

    Every write goes through :mod:`tokenledger.stdlib.safemath`, so a balance
    can never wrap or go negative.
    """

    def __init__(self, contract):
        self.balances = contract.hash('balances', default_value=0)
        self.supply = contract.variable('total_supply', default_value=0)

    def balance_of(self, account):
        return self.balances[account]

    def total_supply(self):
        return self.supply.get()

    def credit(self, account, amount):
        self.balances[account] = safemath.add(self.balances[account], amount)

    def debit(self, account, amount):
        balance = self.balances[account]
        safemath.require_uint(amount)

        if balance < amount:
            raise InsufficientBalance(account=account, balance=balance, required=amount)

        self.balances[account] = safemath.sub(balance, amount)

    def issue(self, account, amount):
        self.supply.set(safemath.add(self.supply.get(), amount))
        self.credit(account, amount)

    def move(self, sender, to, amount):
        # Debit is written before the credit is read, so sender == to nets out
        self.debit(sender, amount)
        self.credit(to, amount)
