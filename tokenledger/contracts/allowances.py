from tokenledger.exceptions import InsufficientAllowance
from tokenledger.stdlib import safemath


class AllowanceRegistry:
    def __init__(self, contract):
        self.allowances = contract.hash('allowances', default_value=0)

    def allowance(self, owner, spender):
        return self.allowances[owner, spender]

    def approve(self, owner, spender, amount):
        self.allowances[owner, spender] = safemath.require_uint(amount)

    def spend(self, owner, spender, amount):
        allowance = self.allowances[owner, spender]
        safemath.require_uint(amount)

        if allowance < amount:
            raise InsufficientAllowance(owner=owner, spender=spender, allowance=allowance, required=amount)

        self.allowances[owner, spender] = safemath.sub(allowance, amount)
