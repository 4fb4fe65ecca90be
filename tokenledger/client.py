from tokenledger.execution.executor import Executor
from tokenledger.db.driver import ContractDriver
from tokenledger.exceptions import ContractNotFound
from functools import partial

from .db.orm import Variable
from .db.orm import Hash


class AbstractContract:
    def __init__(self, name, signer, executor: Executor, funcs):
        self.contract_name = name
        self.signer = signer
        self.executor = executor
        self.functions = funcs

        # set up virtual functions
        for func in funcs:
            # each function is a partial that allows kwarg overloading and overriding
            setattr(self, func, partial(self._abstract_function_call,
                                        signer=self.signer,
                                        contract_name=self.contract_name,
                                        executor=self.executor,
                                        func=func))

    def keys(self):
        return self.executor.driver.get_contract_keys(self.contract_name)

    # a variable contains a DOT, but no __, and no :
    # a hash contains a DOT, no __, and a :
    # contract metadata contains __, a DOT, and no :

    def quick_read(self, variable, key=None, args=None):
        a = []

        if key is not None:
            a.append(key)

        if args is not None and isinstance(args, list):
            for arg in args:
                a.append(arg)

        k = self.executor.driver.make_key(contract=self.contract_name, variable=variable, args=a)
        return self.executor.driver.get(k)

    def quick_write(self, variable, key=None, value=None, args=None):
        if key is not None:
            a = [key]
        else:
            a = []

        if args is not None and isinstance(args, list):
            for arg in args:
                a.append(arg)

        k = self.executor.driver.make_key(contract=self.contract_name, variable=variable, args=a)

        self.executor.driver.set(k, value)
        self.executor.driver.commit()

    def __getattr__(self, item):
        # only called when normal lookup fails, so exported functions never get here
        if item.startswith('_'):
            raise AttributeError(item)

        driver = self.executor.driver
        fullname = driver.make_key(self.contract_name, item)

        # if the raw name exists, it is a variable
        if driver.get(fullname) is not None:
            return Variable(contract=self.contract_name, name=item, driver=driver)

        # otherwise, see if contract.item: has any entries
        if len(driver.keys(prefix=fullname + ':')) > 0:
            return Hash(contract=self.contract_name, name=item, driver=driver)

        raise AttributeError("'{}' has no function or state named '{}'".format(self.contract_name, item))

    def _abstract_function_call(self, signer, executor, contract_name, func, **kwargs):
        output = executor.execute(sender=signer,
                                  contract_name=contract_name,
                                  function_name=func,
                                  kwargs=kwargs)

        if output['status_code'] == 1:
            raise output['result']

        return output['result']


class LedgerClient:
    def __init__(self, signer='sys', driver=None):
        self.raw_driver = driver or ContractDriver()
        self.executor = Executor(driver=self.raw_driver)
        self.signer = signer

    def flush(self):
        # flushes db and forgets every deployed contract
        self.raw_driver.flush()
        self.executor.contracts.clear()
        self.executor.events.clear()

    # Returns abstract contract which has partial methods mapped to each exported function.
    def get_contract(self, name):
        try:
            contract = self.executor.get_contract(name)
        except ContractNotFound:
            return None

        return AbstractContract(name=name,
                                signer=self.signer,
                                executor=self.executor,
                                funcs=contract.exported_functions())

    def submit(self, contract_type, name, constructor_args=None, signer=None):
        output = self.executor.submit(sender=signer or self.signer,
                                      name=name,
                                      contract_type=contract_type,
                                      constructor_args=constructor_args)

        if output['status_code'] == 1:
            raise output['result']

        return self.get_contract(name)

    def get_contracts(self):
        contracts = []
        for key in self.raw_driver.keys():
            if key.endswith('.__type__'):
                contracts.append(key.replace('.__type__', ''))
        return contracts

    def get_var(self, contract, variable, arguments=[]):
        return self.raw_driver.get_var(contract, variable, arguments)

    def set_var(self, contract, variable, arguments=[], value=None):
        self.raw_driver.set_var(contract, variable, arguments, value)
        self.raw_driver.commit()

    def events(self, contract=None, event=None):
        return [e for e in self.executor.events
                if (contract is None or e['contract'] == contract) and
                   (event is None or e['event'] == event)]
