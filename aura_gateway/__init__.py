"""
Aura Gateway - On-chain Reputation Scoring Service

A FastAPI-based microservice that reads a wallet's BNPL and NFT-backed loan
history from the ledger and turns it into an Aura reputation score.
"""

__version__ = "0.1.0"
