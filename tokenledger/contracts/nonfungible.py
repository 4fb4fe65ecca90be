from tokenledger.contracts.base import Contract
from tokenledger.contracts.ownership import OwnershipRegistry
from tokenledger.contracts.operators import OperatorRegistry
from tokenledger.exceptions import Unauthorized, IncorrectOwner, ReceiverRejected
from tokenledger.stdlib.access import export, ctx
from tokenledger.stdlib.events import emit
from tokenledger.stdlib import safemath
from tokenledger.logger import get_logger
from tokenledger import config

log = get_logger('NonFungible')


class NonFungibleTokenLedger(Contract):
    """
    Unique items with per-item and operator-wide approvals.

    Minting is open to anyone willing to pay ``mint_price`` units of the
    payment ledger. The payment is pulled with ``transfer_from``, and inside
    the payment ledger the caller is this contract, so minters approve this
    contract's name as a spender first. The price grows by
    ``config.MINT_PRICE_STEP`` after each mint, truncating at every step.
    """

    def __init__(self, name, executor):
        super().__init__(name, executor)

        self.ownership = OwnershipRegistry(self)
        self.operators = OperatorRegistry(self)
        self.approvals = self.hash('approvals', default_value=config.NULL_ACCOUNT)

        self.token_name = self.variable('name')
        self.token_symbol = self.variable('symbol')
        self.base_uri = self.variable('base_uri', default_value='')
        self.payment_ledger = self.variable('payment_ledger')
        self.price = self.variable('mint_price', default_value=0)
        self.minted = self.variable('minted', default_value=0)

    def construct(self, name, symbol, base_uri, payment_ledger, mint_price):
        self.token_name.set(name)
        self.token_symbol.set(symbol)
        self.base_uri.set(base_uri)
        self.payment_ledger.set(payment_ledger)
        self.price.set(safemath.require_uint(mint_price))

    def _authorized(self, account, owner, token_id):
        return account == owner or \
               self.operators.is_operator(owner, account) or \
               self.approvals[token_id] == account

    @export
    def mint(self, to):
        price = self.price.get()

        payment = self.contract(self.payment_ledger.get())
        payment.transfer_from(sender=ctx.caller, to=config.BURN_ACCOUNT, value=price)

        token_id = safemath.add(self.minted.get(), 1)
        self.minted.set(token_id)
        self.ownership.assign(token_id, to)

        numerator, denominator = config.MINT_PRICE_STEP
        self.price.set(safemath.mul(price, numerator) // denominator)

        emit('Transfer', sender=config.NULL_ACCOUNT, to=to, token_id=token_id)

        return token_id

    @export
    def transfer_from(self, sender, to, token_id):
        owner = self.ownership.owner_of(token_id)

        if not self._authorized(ctx.caller, owner, token_id):
            raise Unauthorized(caller=ctx.caller, action='transfer token {}'.format(token_id))

        if sender != owner:
            raise IncorrectOwner(sender=sender, owner=owner, token_id=token_id)

        self.approvals[token_id] = config.NULL_ACCOUNT
        self.ownership.reassign(token_id, sender, to)

        emit('Transfer', sender=sender, to=to, token_id=token_id)

    @export
    def safe_transfer_from(self, sender, to, token_id, data=b''):
        operator = ctx.caller

        self.transfer_from(sender=sender, to=to, token_id=token_id)

        if not self.is_contract(to):
            return

        # Ledger state is fully written at this point; the receiver may reenter
        receiver = self.contract(to)
        if 'on_token_received' not in receiver.exported_functions():
            raise ReceiverRejected(receiver=to, token_id=token_id)

        try:
            response = receiver.on_token_received(operator=operator, sender=sender, token_id=token_id, data=data)
        except Exception as e:
            log.debug('Receiver {} raised {!r}'.format(to, e))
            raise ReceiverRejected(receiver=to, token_id=token_id) from e

        if response != config.RECEIVER_MAGIC:
            raise ReceiverRejected(receiver=to, token_id=token_id)

    @export
    def approve(self, approved, token_id):
        owner = self.ownership.owner_of(token_id)

        if ctx.caller != owner and not self.operators.is_operator(owner, ctx.caller):
            raise Unauthorized(caller=ctx.caller, action='approve token {}'.format(token_id))

        self.approvals[token_id] = approved
        emit('Approval', owner=owner, approved=approved, token_id=token_id)

    @export
    def set_approval_for_all(self, operator, approved):
        owner = ctx.caller

        if approved:
            changed = self.operators.add(owner, operator)
        else:
            changed = self.operators.remove(owner, operator)

        if changed:
            emit('ApprovalForAll', owner=owner, operator=operator, approved=bool(approved))

    @export
    def is_approved_for_all(self, owner, operator):
        return self.operators.is_operator(owner, operator)

    @export
    def operators_of(self, owner):
        return self.operators.operators_of(owner)

    @export
    def get_approved(self, token_id):
        return self.approvals[token_id]

    @export
    def owner_of(self, token_id):
        return self.ownership.owner_of(token_id)

    @export
    def balance_of(self, owner):
        return self.ownership.balance_of(owner)

    @export
    def token_uri(self, token_id):
        return '{}{}'.format(self.base_uri.get(), token_id)

    @export
    def supports_interface(self, interface_id):
        return interface_id == config.NON_FUNGIBLE_INTERFACE_ID

    @export
    def name(self):
        return self.token_name.get()

    @export
    def symbol(self):
        return self.token_symbol.get()

    @export
    def mint_price(self):
        return self.price.get()

    @export
    def total_minted(self):
        return self.minted.get()
