import base64
import binascii

from pathlib import Path
from typing import (
    Any,
    Iterable
)

from transsmart.infra.client.transsmart_client import TranssmartClient
from transsmart.observability.logger import get_logger

log = get_logger(__name__)


class ShipmentService:
    def __init__(self, client: TranssmartClient):
        self.__client = client

    def book(self, data: Any, action: str = "BOOK") -> Any:
        return self.__client.book_shipment(data, action)

    def book_and_save_documents(self, data: Any, directory: str | Path, action: str = "PRINT") -> list[Path]:
        shipments = self.__client.book_shipment(data, action)

        return self.save_documents(shipments, directory)

    def save_documents(self, shipments: Iterable[dict] | dict, directory: str | Path) -> list[Path]:
        """Decode the base64 ``packageDocs`` of each shipment into ``directory``.

        Files are named ``{reference}.{fileFormat}`` with both parts as the
        server returned them; a shipment carrying several documents gets
        ``{reference}-{n}.{fileFormat}`` instead. Every document is decoded
        and named before anything is written, so a ``ValueError`` (bad
        base64, a name that is not a plain file name, or two documents
        mapping to the same file) leaves ``directory`` untouched.
        """
        if isinstance(shipments, dict):
            shipments = [shipments]

        target = Path(directory)
        pending: dict[Path, bytes] = {}

        for shipment in shipments:
            reference = str(shipment.get("reference", "shipment"))
            docs = shipment.get("packageDocs") or []

            for n, doc in enumerate(docs, start=1):
                if "fileFormat" not in doc:
                    raise ValueError(f"Package document {n} of shipment {reference!r} has no fileFormat")

                fmt = str(doc["fileFormat"])
                name = f"{reference}.{fmt}" if len(docs) == 1 else f"{reference}-{n}.{fmt}"

                if Path(name).name != name:
                    raise ValueError(f"Cannot use {name!r} as a file name")

                path = target / name

                if path in pending:
                    raise ValueError(f"Two package documents would be written to {name!r}")

                try:
                    pending[path] = base64.b64decode(doc["data"], validate=True)
                except (KeyError, binascii.Error) as e:
                    raise ValueError(f"Package document {n} of shipment {reference!r} has no valid base64 data") from e

        target.mkdir(parents=True, exist_ok=True)

        for path, payload in pending.items():
            path.write_bytes(payload)

            log.info("transsmart.document.saved", path=str(path), size=len(payload))

        return list(pending)
