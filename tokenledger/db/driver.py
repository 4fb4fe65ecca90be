from tokenledger.db.encoder import encode, decode, make_key
from tokenledger import config
from tokenledger.logger import get_logger
from datetime import datetime, timezone
import pymongo


# DB maps bytes to bytes
# Driver maps string to python object
TYPE_KEY = config.TYPE_KEY
DEVELOPER_KEY = config.DEVELOPER_KEY
TIME_KEY = config.TIME_KEY

log = get_logger('Driver')


class InMemDriver:
    def __init__(self):
        self.db = {}

    def get(self, item: str):
        key = item.encode()
        return decode(self.db.get(key))

    def set(self, key: str, value):
        if value is None:
            self.__delitem__(key)
        else:
            self.db[key.encode()] = encode(value).encode()

    def delete(self, key: str):
        self.__delitem__(key)

    def iter(self, prefix: str, length=0):
        p = prefix.encode()

        l = []
        for k in sorted(self.db.keys()):
            if k.startswith(p):
                l.append(k.decode())
            if 0 < length <= len(l):
                break

        return l

    def keys(self):
        return sorted([k.decode() for k in self.db.keys()])

    def flush(self):
        self.db.clear()

    def __getitem__(self, item: str):
        value = self.get(item)
        if value is None:
            raise KeyError(item)
        return value

    def __setitem__(self, key: str, value):
        self.set(key, value)

    def __delitem__(self, key: str):
        k = key.encode()
        try:
            del self.db[k]
        except KeyError:
            pass


class MongoDriver:
    # conn_str see https://www.mongodb.com/docs/manual/reference/connection-string/
    def __init__(self, conn_str=config.DB_URL, db=config.DB_NAME, collection=config.DB_COLLECTION, client=None):
        if isinstance(collection, str):
            self.client = client or pymongo.MongoClient(conn_str)
            self.db = self.client[db][collection]
        else:
            # Any object with the pymongo Collection interface
            self.client = client
            self.db = collection

    def get(self, item: str):
        v = self.db.find_one({'rawKey': item})
        if v is None:
            return None

        return decode(v['value'])

    def set(self, key, value):
        if value is None:
            self.delete(key)
            return

        self.db.update_one({'rawKey': key}, {'$set': {'value': encode(value)}}, upsert=True)

    def delete(self, key: str):
        self.db.delete_one({'rawKey': key})

    def iter(self, prefix: str, length=0):
        cur = self.db.find({'rawKey': {'$regex': '^{}'.format(prefix.replace('.', '\\.'))}})

        keys = []
        for entry in cur:
            keys.append(entry['rawKey'])

        keys.sort()
        return keys if length == 0 else keys[:length]

    def keys(self):
        k = []
        for entry in self.db.find({}):
            k.append(entry['rawKey'])
        k.sort()
        return k

    def flush(self):
        self.db.delete_many({})

    def __getitem__(self, item: str):
        value = self.get(item)
        if value is None:
            raise KeyError(item)
        return value

    def __setitem__(self, key: str, value):
        self.set(key, value)

    def __delitem__(self, key: str):
        self.delete(key)


class CacheDriver:
    def __init__(self, driver=None):
        self.pending_writes = {}  # L1 cache
        self.driver = driver or InMemDriver()  # L0 cache

        self.pending_reads = {}

    def find(self, key: str):
        # A pending None is a pending delete, so it must shadow the backing store
        if key in self.pending_writes:
            return self.pending_writes[key]

        return self.driver.get(key)

    def get(self, key: str, save: bool = True):
        value = self.find(key)

        if save and key not in self.pending_reads:
            self.pending_reads[key] = value

        return value

    def set(self, key, value):
        if key not in self.pending_reads:
            self.get(key)

        self.pending_writes[key] = value

    def delete(self, key):
        self.set(key, None)

    def commit(self):
        log.debug('Committing {} writes'.format(len(self.pending_writes)))

        for k, v in self.pending_writes.items():
            if v is None:
                self.driver.delete(k)
            else:
                self.driver.set(k, v)

        self.pending_writes.clear()
        self.pending_reads = {}

    def rollback(self):
        # Returns to disk state which should be whatever it was prior to any write sessions
        log.debug('Discarding {} writes'.format(len(self.pending_writes)))

        self.pending_reads = {}
        self.pending_writes.clear()

    def clear_pending_state(self):
        self.rollback()


class ContractDriver(CacheDriver):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.delimiter = config.INDEX_SEPARATOR

    def items(self, prefix=''):
        # Get all of the items in the cache currently
        _items = {}
        keys = set()

        for k, v in self.pending_writes.items():
            if k.startswith(prefix):
                keys.add(k)
                if v is not None:
                    _items[k] = v

        # Get all of the keys we need
        db_keys = set(self.driver.iter(prefix=prefix))

        # Subtract the already gotten keys
        for k in db_keys - keys:
            _items[k] = self.get(k)

        return _items

    def keys(self, prefix=''):
        return sorted(self.items(prefix).keys())

    def values(self, prefix=''):
        return list(self.items(prefix).values())

    def make_key(self, contract, variable, args=[]):
        return make_key(contract, variable, args)

    def get_var(self, contract, variable, arguments=[]):
        key = self.make_key(contract, variable, arguments)
        return self.get(key)

    def set_var(self, contract, variable, arguments=[], value=None):
        key = self.make_key(contract, variable, arguments)
        self.set(key, value)

    def get_contract(self, name):
        return self.get_var(name, TYPE_KEY)

    def get_developer(self, name):
        return self.get_var(name, DEVELOPER_KEY)

    def get_time_submitted(self, name):
        return self.get_var(name, TIME_KEY)

    def set_contract(self, name, contract_type, developer=None, timestamp=None):
        if self.get_contract(name) is None:
            if timestamp is None:
                timestamp = datetime.now(timezone.utc).isoformat()

            self.set_var(name, TYPE_KEY, value=contract_type)
            self.set_var(name, DEVELOPER_KEY, value=developer)
            self.set_var(name, TIME_KEY, value=timestamp)

    def get_contract_keys(self, name):
        return self.keys(name + self.delimiter)

    def flush(self):
        self.driver.flush()
        self.clear_pending_state()
