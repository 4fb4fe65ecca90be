from unittest import TestCase
from tokenledger.client import LedgerClient
from tokenledger.db.driver import ContractDriver, InMemDriver
from tokenledger.contracts.fungible import FungibleTokenLedger
from tokenledger.exceptions import Unauthorized, InsufficientBalance, InsufficientAllowance, ArithmeticOverflow
from tokenledger import config


class TestFungibleTokenLedger(TestCase):
    def setUp(self):
        self.client = LedgerClient(signer='minter', driver=ContractDriver(driver=InMemDriver()))
        self.tau = self.client.submit(FungibleTokenLedger, name='tau', constructor_args={
            'name': 'Tau',
            'symbol': 'TAU'
        })

    def tearDown(self):
        self.client.flush()

    def supply_matches_balances(self):
        balances = self.client.raw_driver.values(prefix='tau.balances:')
        self.assertEqual(sum(balances), self.tau.total_supply())

    def test_metadata(self):
        self.assertEqual(self.tau.name(), 'Tau')
        self.assertEqual(self.tau.symbol(), 'TAU')
        self.assertEqual(self.tau.decimals(), 18)
        self.assertEqual(self.tau.minter(), 'minter')

    def test_minter_defaults_to_deployer_but_can_be_set(self):
        other = self.client.submit(FungibleTokenLedger, name='other', constructor_args={
            'name': 'Other', 'symbol': 'OTH', 'minter': 'stu'
        })
        self.assertEqual(other.minter(), 'stu')

    def test_initial_supply_minted_to_minter(self):
        seeded = self.client.submit(FungibleTokenLedger, name='seeded', constructor_args={
            'name': 'Seeded', 'symbol': 'SEE', 'initial_supply': 1000
        })
        self.assertEqual(seeded.balance_of(account='minter'), 1000)
        self.assertEqual(seeded.total_supply(), 1000)

    def test_mint(self):
        self.tau.mint(account='stu', amount=100)

        self.assertEqual(self.tau.balance_of(account='stu'), 100)
        self.assertEqual(self.tau.total_supply(), 100)
        self.supply_matches_balances()

    def test_mint_emits_transfer_from_null(self):
        self.tau.mint(account='stu', amount=100)

        self.assertEqual(self.client.events(contract='tau', event='Transfer')[-1]['data'],
                         {'sender': config.NULL_ACCOUNT, 'to': 'stu', 'amount': 100})

    def test_mint_by_non_minter_fails(self):
        with self.assertRaises(Unauthorized):
            self.tau.mint(account='stu', amount=100, signer='stu')

        self.assertEqual(self.tau.total_supply(), 0)

    def test_mint_overflow(self):
        self.tau.mint(account='stu', amount=config.MAX_UINT256)

        with self.assertRaises(ArithmeticOverflow):
            self.tau.mint(account='raghu', amount=1)

        self.assertEqual(self.tau.balance_of(account='raghu'), 0)
        self.assertEqual(self.tau.total_supply(), config.MAX_UINT256)

    def test_balance_of_unknown_is_zero(self):
        self.assertEqual(self.tau.balance_of(account='nobody'), 0)

    def test_transfer(self):
        self.tau.mint(account='stu', amount=100)

        self.assertTrue(self.tau.transfer(to='raghu', value=30, signer='stu'))

        self.assertEqual(self.tau.balance_of(account='stu'), 70)
        self.assertEqual(self.tau.balance_of(account='raghu'), 30)
        self.supply_matches_balances()

    def test_transfer_too_much_changes_nothing(self):
        self.tau.mint(account='stu', amount=100)

        with self.assertRaises(InsufficientBalance):
            self.tau.transfer(to='raghu', value=101, signer='stu')

        self.assertEqual(self.tau.balance_of(account='stu'), 100)
        self.assertEqual(self.tau.balance_of(account='raghu'), 0)

    def test_transfer_negative_fails(self):
        self.tau.mint(account='stu', amount=100)

        with self.assertRaises(ArithmeticOverflow):
            self.tau.transfer(to='raghu', value=-1, signer='stu')

        self.assertEqual(self.tau.balance_of(account='stu'), 100)

    def test_transfer_to_self(self):
        self.tau.mint(account='stu', amount=100)
        self.tau.transfer(to='stu', value=100, signer='stu')

        self.assertEqual(self.tau.balance_of(account='stu'), 100)

    def test_approve_overwrites(self):
        self.tau.approve(spender='raghu', value=50, signer='stu')
        self.tau.approve(spender='raghu', value=7, signer='stu')

        self.assertEqual(self.tau.allowance(owner='stu', spender='raghu'), 7)

    def test_approve_emits(self):
        self.tau.approve(spender='raghu', value=50, signer='stu')

        self.assertEqual(self.client.events(event='Approval'), [{
            'contract': 'tau',
            'event': 'Approval',
            'data': {'owner': 'stu', 'spender': 'raghu', 'amount': 50}
        }])

    def test_transfer_from(self):
        self.tau.mint(account='stu', amount=100)
        self.tau.approve(spender='raghu', value=50, signer='stu')

        self.assertTrue(self.tau.transfer_from(sender='stu', to='colin', value=20, signer='raghu'))

        self.assertEqual(self.tau.balance_of(account='stu'), 80)
        self.assertEqual(self.tau.balance_of(account='colin'), 20)
        self.assertEqual(self.tau.allowance(owner='stu', spender='raghu'), 30)
        self.supply_matches_balances()

    def test_transfer_from_over_allowance_leaves_allowance(self):
        self.tau.mint(account='stu', amount=100)
        self.tau.approve(spender='raghu', value=10, signer='stu')

        with self.assertRaises(InsufficientAllowance):
            self.tau.transfer_from(sender='stu', to='colin', value=11, signer='raghu')

        self.assertEqual(self.tau.allowance(owner='stu', spender='raghu'), 10)
        self.assertEqual(self.tau.balance_of(account='stu'), 100)

    def test_transfer_from_insufficient_balance_restores_allowance(self):
        self.tau.mint(account='stu', amount=5)
        self.tau.approve(spender='raghu', value=10, signer='stu')

        with self.assertRaises(InsufficientBalance):
            self.tau.transfer_from(sender='stu', to='colin', value=10, signer='raghu')

        self.assertEqual(self.tau.allowance(owner='stu', spender='raghu'), 10)
        self.assertEqual(self.tau.balance_of(account='stu'), 5)

    def test_transfer_from_without_allowance(self):
        self.tau.mint(account='stu', amount=100)

        with self.assertRaises(InsufficientAllowance):
            self.tau.transfer_from(sender='stu', to='raghu', value=1, signer='raghu')

    def test_mint_approve_transfer_from_scenario(self):
        self.tau.mint(account='a', amount=100)
        self.tau.approve(spender='b', value=40, signer='a')
        self.tau.transfer_from(sender='a', to='c', value=40, signer='b')

        self.assertEqual(self.tau.balance_of(account='a'), 60)
        self.assertEqual(self.tau.balance_of(account='c'), 40)
        self.assertEqual(self.tau.allowance(owner='a', spender='b'), 0)

    def test_supply_invariant_over_sequence(self):
        accounts = ['a', 'b', 'c', 'd']
        for i, account in enumerate(accounts):
            self.tau.mint(account=account, amount=(i + 1) * 100)
            self.supply_matches_balances()

        for i in range(20):
            sender = accounts[i % 4]
            to = accounts[(i * 3 + 1) % 4]
            try:
                self.tau.transfer(to=to, value=(i * 37) % 250, signer=sender)
            except InsufficientBalance:
                pass
            self.supply_matches_balances()

            spender = accounts[(i + 2) % 4]
            self.tau.approve(spender=spender, value=50, signer=sender)
            try:
                self.tau.transfer_from(sender=sender, to=to, value=(i * 13) % 70, signer=spender)
            except (InsufficientBalance, InsufficientAllowance):
                pass
            self.supply_matches_balances()

        self.assertEqual(self.tau.total_supply(), 1000)
