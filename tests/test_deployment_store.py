"""Deployment records, the JSON store and the pending-creation journal."""

import json

import pytest

from court_deployment.core.config.constants import VERSION
from court_deployment.core.errors import InvalidRecordError
from court_deployment.core.module_kind import ModuleKind
from court_deployment.core.records import DeploymentRecord
from court_deployment.runtime.deployment_store import DeploymentStore
from court_deployment.runtime.pending_journal import PendingCreationJournal, journal_path_for

ADDRESS = "0x00000000000000000000000000000000000000c0"
TX = "0x" + "ab" * 32


class TestDeploymentRecord:
    def test_requires_address_and_creation_ref_together(self):
        with pytest.raises(InvalidRecordError):
            DeploymentRecord(address=ADDRESS, creation_ref="")
        with pytest.raises(InvalidRecordError):
            DeploymentRecord(address="", creation_ref=TX)

    def test_with_verification_only_touches_verification(self):
        record = DeploymentRecord(address=ADDRESS, creation_ref=TX)

        verified = record.with_verification("https://explorer/address/x#code")

        assert verified.address == record.address
        assert verified.creation_ref == record.creation_ref
        assert verified.schema_version == VERSION
        assert verified.is_verified
        assert not record.is_verified

    def test_verification_is_written_once(self):
        verified = DeploymentRecord(address=ADDRESS, creation_ref=TX).with_verification("ref-1")

        with pytest.raises(InvalidRecordError):
            verified.with_verification("ref-2")

    def test_rejects_empty_verification(self):
        with pytest.raises(InvalidRecordError):
            DeploymentRecord(address=ADDRESS, creation_ref=TX).with_verification("")

    def test_stored_representation(self):
        record = DeploymentRecord(address=ADDRESS, creation_ref=TX, verification_ref="ref")

        data = record.to_dict()

        assert data == {"address": ADDRESS, "transactionHash": TX, "version": VERSION, "verification": "ref"}
        assert DeploymentRecord.from_dict(data) == record
        assert "verification" not in DeploymentRecord(address=ADDRESS, creation_ref=TX).to_dict()


class TestDeploymentStore:
    def test_missing_file_is_an_empty_store(self, tmp_path):
        store = DeploymentStore(str(tmp_path / "missing.json"), "testnet")

        assert store.get(ModuleKind.CONTROLLER) is None
        assert store.records() == {}
        assert not store.has_address(ModuleKind.VOTING)

    def test_record_survives_reload(self, store_path):
        store = DeploymentStore(store_path, "testnet")
        store.record_deployment(ModuleKind.CONTROLLER, DeploymentRecord(address=ADDRESS, creation_ref=TX))

        reloaded = DeploymentStore(store_path, "testnet")

        assert reloaded.get(ModuleKind.CONTROLLER) == DeploymentRecord(address=ADDRESS, creation_ref=TX)
        assert store.revision == 1

    def test_file_layout_is_namespaced_by_network(self, store_path):
        DeploymentStore(store_path, "testnet").record_deployment(
            ModuleKind.CONTROLLER, DeploymentRecord(address=ADDRESS, creation_ref=TX)
        )
        DeploymentStore(store_path, "mainnet").record_deployment(
            ModuleKind.VOTING, DeploymentRecord(address=ADDRESS, creation_ref=TX)
        )

        with open(store_path) as f:
            document = json.load(f)

        assert document["testnet"]["controller"] == {"address": ADDRESS, "transactionHash": TX, "version": VERSION}
        assert set(document["mainnet"]) == {"voting"}
        assert DeploymentStore(store_path, "mainnet").get(ModuleKind.CONTROLLER) is None

    def test_deployment_records_are_immutable(self, store_path):
        store = DeploymentStore(store_path, "testnet")
        store.record_deployment(ModuleKind.CONTROLLER, DeploymentRecord(address=ADDRESS, creation_ref=TX))

        with pytest.raises(InvalidRecordError):
            store.record_deployment(ModuleKind.CONTROLLER, DeploymentRecord(address="0x01", creation_ref="0x02"))

        assert store.revision == 1

    def test_record_verification_keeps_other_fields(self, store_path):
        store = DeploymentStore(store_path, "testnet")
        store.record_deployment(ModuleKind.TREASURY, DeploymentRecord(address=ADDRESS, creation_ref=TX))

        updated = store.record_verification(ModuleKind.TREASURY, "https://explorer/address/x#code")

        assert updated.address == ADDRESS
        assert updated.creation_ref == TX
        reloaded = DeploymentStore(store_path, "testnet").get(ModuleKind.TREASURY)
        assert reloaded.verification_ref == updated.verification_ref
        assert store.revision == 2

    def test_record_verification_requires_a_deployment(self, store_path):
        store = DeploymentStore(store_path, "testnet")

        with pytest.raises(InvalidRecordError):
            store.record_verification(ModuleKind.TREASURY, "ref")

    def test_empty_entries_count_as_absent(self, store_path):
        with open(store_path, "w") as f:
            json.dump({"testnet": {"voting": {}, "registry": {"address": "", "transactionHash": ""}}}, f)

        store = DeploymentStore(store_path, "testnet")

        assert store.get(ModuleKind.VOTING) is None
        assert store.get(ModuleKind.REGISTRY) is None

    def test_corrupt_entry_is_rejected_on_load(self, store_path):
        with open(store_path, "w") as f:
            json.dump({"testnet": {"voting": {"address": ADDRESS}}}, f)

        store = DeploymentStore(store_path, "testnet")

        with pytest.raises(InvalidRecordError, match="Corrupt 'voting' entry"):
            store.get(ModuleKind.VOTING)

    @pytest.mark.parametrize(
        "document", [{"testnet": {"voting": "0xabc"}}, {"testnet": {"voting": ["0xabc"]}}, {"testnet": "0xabc"}]
    )
    def test_entry_that_is_not_an_object_is_rejected(self, store_path, document):
        with open(store_path, "w") as f:
            json.dump(document, f)

        store = DeploymentStore(store_path, "testnet")

        with pytest.raises(InvalidRecordError, match="Corrupt"):
            store.get(ModuleKind.VOTING)

    def test_writes_keep_entries_from_other_writers(self, store_path):
        first = DeploymentStore(store_path, "testnet")
        second = DeploymentStore(store_path, "testnet")

        first.record_deployment(ModuleKind.CONTROLLER, DeploymentRecord(address=ADDRESS, creation_ref=TX))
        second.record_deployment(ModuleKind.VOTING, DeploymentRecord(address=ADDRESS, creation_ref=TX))

        assert set(DeploymentStore(store_path, "testnet").records()) == {ModuleKind.CONTROLLER, ModuleKind.VOTING}


class TestPendingCreationJournal:
    def test_path_sits_next_to_store(self):
        assert journal_path_for("work_dirs/deployments.json") == "work_dirs/deployments.pending.json"
        assert journal_path_for("deployments") == "deployments.pending.json"

    def test_mark_and_clear(self, store_path):
        journal = PendingCreationJournal(journal_path_for(store_path), "testnet")

        journal.mark(ModuleKind.VOTING)

        assert journal.is_pending(ModuleKind.VOTING)
        assert list(PendingCreationJournal(journal.path, "testnet").pending()) == [ModuleKind.VOTING]
        assert PendingCreationJournal(journal.path, "mainnet").pending() == {}

        journal.clear(ModuleKind.VOTING)

        assert journal.pending() == {}
        journal.clear(ModuleKind.VOTING)
