class LedgerError(Exception):
    """
    The base exception for tokenledger. The fmt directive
    will be overloaded by the inheriting classes

    :ivar msg: The message associated with the error
    """
    fmt = 'An unspecified error occurred'

    def __init__(self, **kwargs):
        msg = self.fmt.format(**kwargs)
        Exception.__init__(self, msg)
        self.kwargs = kwargs


class Unauthorized(LedgerError):
    """
    The caller lacks the relationship to the resource that the
    operation requires (not minter, owner, operator or approved)

    :ivar caller: The identity that attempted the operation
    :ivar action: A short description of the operation
    """
    fmt = "'{caller}' is not authorized to {action}"


class IncorrectOwner(Unauthorized):
    """
    A transfer named a sender that does not own the item

    :ivar sender: The account passed as the transfer source
    :ivar owner: The recorded owner of the item
    :ivar token_id: The item identifier
    """
    fmt = "Token {token_id} is owned by '{owner}', not '{sender}'"


class InsufficientBalance(LedgerError):
    fmt = "Balance of '{account}' is {balance}, {required} required"


class InsufficientAllowance(LedgerError):
    fmt = "Allowance of '{spender}' over '{owner}' is {allowance}, {required} required"


class ArithmeticOverflow(LedgerError):
    """
    A checked operation left the unsigned 256 bit range

    :ivar operation: add, sub or mul
    :ivar a: Left operand
    :ivar b: Right operand
    """
    fmt = 'Unsigned {operation} out of range: {a}, {b}'


class ReceiverRejected(LedgerError):
    fmt = "Receiver '{receiver}' did not acknowledge token {token_id}"


class ContractExists(LedgerError):
    """
    When attempting to deploy a contract, found that it
    already exists in the database

    :ivar contract_name: The name of the contract
                         submitted.
    """
    fmt = "Contract with name '{contract_name}' already exists in the database"


class ContractNotFound(LedgerError):
    fmt = "Contract with name '{contract_name}' is not deployed"


class FunctionNotExported(LedgerError):
    fmt = "Function '{function_name}' is not exported by '{contract_name}'"
