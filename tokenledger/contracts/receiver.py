from tokenledger.contracts.base import Contract
from tokenledger.stdlib.access import export
from tokenledger import config


class TokenReceiver(Contract):
    """
    Contract that accepts items sent with ``safe_transfer_from``.

    Subclasses override :meth:`received` to react to an incoming item. The
    hook runs after the sending ledger has written the transfer, so the
    ledger already reports this contract as the owner. Raising from
    :meth:`received` makes the sender abort the whole transfer.
    """

    def received(self, operator, sender, token_id, data):
        pass

    @export
    def on_token_received(self, operator, sender, token_id, data=b''):
        self.received(operator, sender, token_id, data)
        return config.RECEIVER_MAGIC
