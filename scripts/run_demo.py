"""
Ballot Relay — Demo Script

Walks the client-side flow against a running relay and a wallet endpoint:
1. Load contract addresses and token supply
2. Connect the wallet
3. Mint tokens to the wallet, delegate, vote
4. Read the winning proposal

Start the relay first:
    uvicorn ballot_relay.main:app --port 3000
"""
import argparse
import asyncio
import time

import httpx

from ballot_relay_sdk import BallotDapp, BallotRelayClient, ErrorResult, WalletSession

# ANSI colors for terminal output
GREEN = "\033[92m"
BLUE = "\033[94m"
RED = "\033[91m"
CYAN = "\033[96m"
BOLD = "\033[1m"
RESET = "\033[0m"


def banner(text: str):
    print(f"\n{BOLD}{CYAN}{'=' * 60}")
    print(f"  {text}")
    print(f"{'=' * 60}{RESET}\n")


def step(text: str):
    print(f"  {GREEN}[{time.strftime('%H:%M:%S')}]{RESET} {text}")


def info(text: str):
    print(f"           {BLUE}{text}{RESET}")


def error(text: str):
    print(f"           {RED}{text}{RESET}")


def report(result):
    if isinstance(result, ErrorResult):
        error(result.message)
        error(result.detailed_message)
    else:
        info(result.message)
        info(result.etherscan_link)


async def demo(relay_url: str, wallet_url: str, amount: str, proposal_id: str):
    async with BallotRelayClient(relay_url) as client:
        try:
            await client.client.get("/health")
        except httpx.HTTPError:
            error(f"Relay is not reachable at {relay_url}")
            print("\n  Start it first with:")
            print("  uvicorn ballot_relay.main:app --port 3000")
            return

        wallet = WalletSession(wallet_url)
        dapp = BallotDapp(client, wallet)
        try:
            banner("Contracts")
            await dapp.load_contract_addresses()
            step(f"MyToken:          {dapp.my_token_contract_address}")
            step(f"TokenizedBallot:  {dapp.tokenized_ballot_contract_address}")
            step(f"Total supply:     {dapp.total_supply}")

            banner("Wallet")
            await dapp.connect_wallet()
            step(f"Address:        {dapp.user_address}")
            step(f"ETH balance:    {dapp.user_eth_balance}")
            step(f"Token balance:  {dapp.user_token_balance}")

            banner("Mint, delegate, vote")
            step(f"Requesting {amount} tokens")
            report(await dapp.request_tokens(amount))
            step(f"Delegating to {dapp.user_address}")
            report(await dapp.delegate(dapp.user_address))
            step(f"Voting {amount} for proposal {proposal_id}")
            report(await dapp.vote(proposal_id, amount))

            banner("Result")
            report(await dapp.get_winning_proposal())
        finally:
            await wallet.aclose()


def main():
    parser = argparse.ArgumentParser(description="Ballot Relay client demo")
    parser.add_argument("--relay", default="http://localhost:3000")
    parser.add_argument("--wallet", default="http://localhost:8545")
    parser.add_argument("--amount", default="5000")
    parser.add_argument("--proposal", default="1")
    args = parser.parse_args()
    asyncio.run(demo(args.relay, args.wallet, args.amount, args.proposal))


if __name__ == "__main__":
    main()
