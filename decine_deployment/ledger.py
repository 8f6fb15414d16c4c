import json
from pathlib import Path
from typing import Dict, Mapping

from eth_typing import ChecksumAddress
from eth_utils import to_checksum_address

from decine_deployment.constants import LEDGER_FILEPATH, NULL_ADDRESS

ContractName = str

STANDARD_LEDGER_JSON_FORMAT = {"indent": 2, "sort_keys": True}


class AddressLedger:
    """
    Persisted record of the last known address of each deployed contract,
    keyed by logical contract name.

    The backing file is read in full on every access and replaced in full on
    every write. A single writer at a time is assumed.
    """

    class Malformed(ValueError):
        """Raised when the ledger file is not a mapping of names to addresses"""

    def __init__(self, filepath: Path = LEDGER_FILEPATH):
        self.filepath = Path(filepath)

    def __repr__(self):
        return f"{self.__class__.__name__}({self.filepath})"

    def load(self) -> Dict[ContractName, str]:
        """Returns the full mapping; empty if nothing was recorded yet."""
        if not self.filepath.exists():
            return dict()

        with open(self.filepath, "r", encoding="utf-8") as file:
            try:
                data = json.load(file, object_pairs_hook=self._unique_entries)
            except (json.JSONDecodeError, UnicodeDecodeError) as e:
                raise self.Malformed(f"Ledger at {self.filepath} is not valid JSON: {e}")

        if not isinstance(data, dict):
            raise self.Malformed(f"Ledger at {self.filepath} must contain a JSON object.")
        for name, address in data.items():
            if not isinstance(address, str):
                raise self.Malformed(
                    f"Ledger entry '{name}' at {self.filepath} has a non-string address."
                )
        return data

    def _unique_entries(self, pairs) -> dict:
        entries = dict()
        for name, value in pairs:
            if name in entries:
                raise self.Malformed(
                    f"Ledger at {self.filepath} has duplicate entries for '{name}'."
                )
            entries[name] = value
        return entries

    def lookup(self, name: ContractName) -> str:
        """Returns the recorded address for the contract, or the null address."""
        return self.load().get(name, NULL_ADDRESS)

    def merge(self, entries: Mapping[ContractName, str]) -> Dict[ContractName, str]:
        """
        Overlays the entries on the recorded ones (new entries win) and writes
        the result back as a full replacement of the ledger file.
        """
        new_entries = {name: _checksum(name, address) for name, address in entries.items()}
        addresses = self.load()
        addresses.update(new_entries)
        self._write(addresses)
        return addresses

    def _write(self, addresses: Mapping[ContractName, str]) -> None:
        self.filepath.parent.mkdir(parents=True, exist_ok=True)
        temp_filepath = self.filepath.with_suffix(".temp.json")
        try:
            with open(temp_filepath, "w", encoding="utf-8") as file:
                json.dump(addresses, file, **STANDARD_LEDGER_JSON_FORMAT)
                file.write("\n")
            temp_filepath.replace(self.filepath)
        except Exception:
            temp_filepath.unlink(missing_ok=True)
            raise


def _checksum(name: ContractName, address: str) -> ChecksumAddress:
    try:
        return to_checksum_address(address)
    except ValueError:
        raise ValueError(f"Invalid address '{address}' for {name}")
