from tokenledger.db.orm import Variable, Hash


class Contract:
    """
    A named account whose state lives in the executor's driver.

    Subclasses declare their storage in ``__init__`` and mark the methods
    callable from outside with ``@export``. Anything else is private to the
    contract and to other Python code holding the instance.
    """

    def __init__(self, name, executor):
        self.this = name
        self.executor = executor
        self.driver = executor.driver

    def construct(self, **kwargs):
        pass

    @classmethod
    def exported_functions(cls):
        return sorted(name for name in dir(cls) if getattr(getattr(cls, name, None), '__exported__', False))

    def variable(self, name, t=None, default_value=None):
        return Variable(self.this, name, driver=self.driver, t=t, default_value=default_value)

    def hash(self, name, default_value=None):
        return Hash(self.this, name, driver=self.driver, default_value=default_value)

    def contract(self, name):
        return self.executor.get_contract(name)

    def is_contract(self, name):
        return self.executor.is_contract(name)
