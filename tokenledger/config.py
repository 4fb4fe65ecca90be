DB_URL = 'mongodb://localhost:27017'
DB_NAME = 'tokenledger'
DB_COLLECTION = 'state'

DELIMITER = ':'
INDEX_SEPARATOR = '.'

TYPE_KEY = '__type__'
DEVELOPER_KEY = '__developer__'
TIME_KEY = '__submitted__'

PRIVATE_METHOD_PREFIX = '_'

MAX_HASH_DIMENSIONS = 16
MAX_KEY_SIZE = 1024

# Depth of nested contract-to-contract calls
RECURSION_LIMIT = 1024

MAX_UINT256 = 2 ** 256 - 1

DECIMALS = 18

NULL_ACCOUNT = '0x0000000000000000000000000000000000000000'
BURN_ACCOUNT = '0x000000000000000000000000000000000000dEaD'

RECEIVER_MAGIC = '0x150b7a02'
NON_FUNGIBLE_INTERFACE_ID = '0x80ac58cd'

# price = price * 11 // 10 after every mint
MINT_PRICE_STEP = (11, 10)

# Committed events kept by an executor, None for unbounded
EVENT_LOG_SIZE = 10000
