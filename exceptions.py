from fastapi import HTTPException, status


class UnauthorizedException(HTTPException):
    def __init__(self, detail: str = "Unauthorized"):
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


class BadRequestException(HTTPException):
    def __init__(self, detail: str = "Bad Request"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class TransactionFailed(Exception):
    """Transaction was mined but reverted (receipt status 0)"""

    def __init__(self, receipt):
        self.receipt = receipt
        tx_hash = receipt.get("transactionHash")
        if hasattr(tx_hash, "hex"):
            tx_hash = tx_hash.hex()
        super().__init__(f"Transaction {tx_hash} reverted")


class ContractCallError(Exception):
    """Contract call reverted, message is the revert reason when the node gave one"""
