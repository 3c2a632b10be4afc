"""Transaction types recognised by the ledger."""

from enum import Enum


class TransactionType(Enum):
    """Closed set of money movements against a book."""

    TRANSFER_IN_FROM_TWD = "TRANSFER_IN_FROM_TWD"
    TRANSFER_OUT_TO_TWD = "TRANSFER_OUT_TO_TWD"
    TRANSFER_IN_FROM_FOREIGN = "TRANSFER_IN_FROM_FOREIGN"
    TRANSFER_OUT_TO_FOREIGN = "TRANSFER_OUT_TO_FOREIGN"
    TRANSFER_IN_FROM_INTEREST = "TRANSFER_IN_FROM_INTEREST"
    TRANSFER_IN_FROM_OTHER = "TRANSFER_IN_FROM_OTHER"
    TRANSFER_OUT_TO_OTHER = "TRANSFER_OUT_TO_OTHER"

    @property
    def is_transfer_in(self) -> bool:
        return self.name.startswith("TRANSFER_IN_")

    @property
    def related_type(self) -> "TransactionType":
        """Type of the counterpart entry on the related book.

        Raises:
            ValueError: If the type never involves a second book
        """
        try:
            return _RELATED_TYPES[self]
        except KeyError:
            raise ValueError(f"{self.name} has no related book counterpart")

    @classmethod
    def parse(cls, name: str) -> "TransactionType":
        """Look up a type by name, case-insensitively.

        Accepts dashes in place of underscores, so "transfer-in-from-twd"
        resolves too.

        Raises:
            ValueError: If the name is not a known transaction type
        """
        key = name.strip().upper().replace("-", "_")
        try:
            return cls[key]
        except KeyError:
            valid = ", ".join(member.name for member in cls)
            raise ValueError(f"Unknown transaction type '{name}'. Valid types: {valid}")


_RELATED_TYPES = {
    TransactionType.TRANSFER_IN_FROM_FOREIGN: TransactionType.TRANSFER_OUT_TO_FOREIGN,
    TransactionType.TRANSFER_OUT_TO_FOREIGN: TransactionType.TRANSFER_IN_FROM_FOREIGN,
}
