from tokenledger import config


class Context:
    def __init__(self, base_state, maxlen=config.RECURSION_LIMIT):
        self._state = []
        self._pushed = []
        self._base_state = base_state
        self._maxlen = maxlen

    def _context_changed(self, contract):
        if self._get_state()['this'] == contract:
            return False
        return True

    def _get_state(self):
        if len(self._state) == 0:
            return self._base_state
        return self._state[-1]

    def _add_state(self, state: dict):
        # Calls within the same contract keep the current frame, so record whether a frame was pushed
        if self._context_changed(state['this']):
            assert len(self._state) < self._maxlen, 'Contract call depth exceeds {}'.format(self._maxlen)
            self._state.append(state)
            self._pushed.append(True)
        else:
            self._pushed.append(False)

    def _pop_state(self):
        if len(self._pushed) > 0 and self._pushed.pop(-1):
            self._state.pop(-1)

    def _reset(self):
        self._state = []
        self._pushed = []

    @property
    def this(self):
        return self._get_state()['this']

    @property
    def caller(self):
        return self._get_state()['caller']

    @property
    def signer(self):
        return self._get_state()['signer']


_context = Context({
        'this': None,
        'caller': None,
        'signer': None
    })


class Runtime:
    events = []

    context = _context

    @classmethod
    def set_up(cls, signer, contract_name):
        cls.context._reset()
        cls.context._base_state = {
            'signer': signer,
            'caller': signer,
            'this': contract_name
        }
        cls.events = []

    @classmethod
    def clean_up(cls):
        cls.context._reset()
        cls.context._base_state = {
            'this': None,
            'caller': None,
            'signer': None
        }
        cls.events = []

    @classmethod
    def emit(cls, event, data):
        cls.events.append({
            'contract': cls.context.this,
            'event': event,
            'data': data
        })

rt = Runtime()
