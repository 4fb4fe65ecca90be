from tokenledger.execution import runtime
from tokenledger.db.driver import ContractDriver
from tokenledger.exceptions import ContractExists, ContractNotFound, FunctionNotExported
from tokenledger.logger import get_logger
from tokenledger import config
from copy import deepcopy
import importlib
import traceback

log = get_logger('Executor')


class Executor:
    def __init__(self, driver=None, event_log_size=config.EVENT_LOG_SIZE):
        self.driver = driver

        if not self.driver:
            self.driver = ContractDriver()

        self.contracts = {}
        self.events = []
        self.event_log_size = event_log_size

        # Number of calls currently on the stack. Only the outermost one owns the pending state.
        self._depth = 0

    def is_contract(self, name):
        return self.driver.get_contract(name) is not None

    def get_contract(self, name):
        contract_type = self.driver.get_contract(name)

        if contract_type is None:
            raise ContractNotFound(contract_name=name)

        contract = self.contracts.get(name)

        if contract is None:
            contract = self._load_contract(name, contract_type)
            self.contracts[name] = contract

        return contract

    def _load_contract(self, name, contract_type):
        # contract_type is the 'module.Class' string recorded at submission
        module_name, _, class_name = contract_type.rpartition('.')

        try:
            module = importlib.import_module(module_name)
            cls = getattr(module, class_name)
        except (ImportError, AttributeError, ValueError) as e:
            log.error('Cannot load {} for {}'.format(contract_type, name))
            raise ContractNotFound(contract_name=name) from e

        log.debug('Loaded {} as {}'.format(name, contract_type))
        return cls(name=name, executor=self)

    def submit(self, sender, name, contract_type, constructor_args=None) -> dict:
        def deploy():
            if self.driver.get_contract(name) is not None:
                raise ContractExists(contract_name=name)

            contract = contract_type(name=name, executor=self)

            self.contracts[name] = contract
            self.driver.set_contract(name=name,
                                     contract_type='{}.{}'.format(contract_type.__module__, contract_type.__name__),
                                     developer=sender)

            contract.construct(**(constructor_args or {}))
            return contract

        output = self._run(sender, name, '__construct__', deploy)

        # The instance is only reachable if its construction committed
        if output['status_code'] == 1 and self.driver.get_contract(name) is None:
            self.contracts.pop(name, None)

        return output

    def execute(self, sender, contract_name, function_name, kwargs) -> dict:
        def call():
            contract = self.get_contract(contract_name)

            if function_name.startswith(config.PRIVATE_METHOD_PREFIX) or \
                    function_name not in contract.exported_functions():
                raise FunctionNotExported(contract_name=contract_name, function_name=function_name)

            return getattr(contract, function_name)(**kwargs)

        return self._run(sender, contract_name, function_name, call)

    def _run(self, sender, contract_name, function_name, func) -> dict:
        log.debug('{} -> {}.{}'.format(sender, contract_name, function_name))

        if self._depth > 0:
            return self._run_nested(func)

        runtime.rt.set_up(signer=sender, contract_name=contract_name)

        try:
            status_code = 0
            result = self._call(func)

            writes = deepcopy(self.driver.pending_writes)
            self.driver.commit()

            events = list(runtime.rt.events)
            self._log_events(events)
        except Exception as e:
            result = e
            tb = traceback.format_exc()
            log.error(str(e))
            log.debug(tb)
            status_code = 1

            writes = {}
            events = []
            self.driver.clear_pending_state()
        finally:
            runtime.rt.clean_up()

        return {
            'status_code': status_code,
            'result': result,
            'events': events,
            'writes': writes,
        }

    def _run_nested(self, func) -> dict:
        # Runs inside the outer call: the identity stack, pending writes and
        # events all belong to it, and any error fails the outer call too.
        # The sender of a nested call is ignored, the caller is the contract making it.
        result = self._call(func)

        return {
            'status_code': 0,
            'result': result,
            'events': [],
            'writes': {},
        }

    def _call(self, func):
        self._depth += 1
        try:
            return func()
        finally:
            self._depth -= 1

    def _log_events(self, events):
        self.events.extend(events)

        # Oldest events are dropped first
        if self.event_log_size is not None and len(self.events) > self.event_log_size:
            del self.events[:len(self.events) - self.event_log_size]
