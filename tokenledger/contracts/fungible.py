from tokenledger.contracts.base import Contract
from tokenledger.contracts.balances import BalanceLedger
from tokenledger.contracts.allowances import AllowanceRegistry
from tokenledger.exceptions import Unauthorized
from tokenledger.stdlib.access import export, ctx
from tokenledger.stdlib.events import emit
from tokenledger import config


class FungibleTokenLedger(Contract):
    def __init__(self, name, executor):
        super().__init__(name, executor)

        self.ledger = BalanceLedger(self)
        self.allowances = AllowanceRegistry(self)

        self.token_name = self.variable('name')
        self.token_symbol = self.variable('symbol')
        self.minter_account = self.variable('minter')

    def construct(self, name, symbol, minter=None, initial_supply=0):
        self.token_name.set(name)
        self.token_symbol.set(symbol)

        # Fixed at construction
        self.minter_account.set(minter or ctx.caller)

        if initial_supply:
            self._mint(self.minter_account.get(), initial_supply)

    def _mint(self, account, amount):
        self.ledger.issue(account, amount)
        emit('Transfer', sender=config.NULL_ACCOUNT, to=account, amount=amount)

    @export
    def mint(self, account, amount):
        if ctx.caller != self.minter_account.get():
            raise Unauthorized(caller=ctx.caller, action='mint {}'.format(self.this))

        self._mint(account, amount)

    @export
    def transfer(self, to, value):
        sender = ctx.caller

        self.ledger.move(sender, to, value)
        emit('Transfer', sender=sender, to=to, amount=value)

        return True

    @export
    def approve(self, spender, value):
        owner = ctx.caller

        self.allowances.approve(owner, spender, value)
        emit('Approval', owner=owner, spender=spender, amount=value)

        return True

    @export
    def transfer_from(self, sender, to, value):
        # The allowance is spent before any balance moves
        self.allowances.spend(sender, ctx.caller, value)
        self.ledger.move(sender, to, value)

        emit('Transfer', sender=sender, to=to, amount=value)

        return True

    @export
    def balance_of(self, account):
        return self.ledger.balance_of(account)

    @export
    def allowance(self, owner, spender):
        return self.allowances.allowance(owner, spender)

    @export
    def total_supply(self):
        return self.ledger.total_supply()

    @export
    def name(self):
        return self.token_name.get()

    @export
    def symbol(self):
        return self.token_symbol.get()

    @export
    def decimals(self):
        return config.DECIMALS

    @export
    def minter(self):
        return self.minter_account.get()
