"""
Tests for process_assertions.filters: category-scoped record queries.
"""

import dataclasses

import pytest

from process_assertions.filters import (
    FILTERS_BY_VALUE_TYPE,
    ProcessInstanceRecordFilter,
    StreamFilter,
    filter_for,
    incident_records,
    job_records,
    message_records,
    process_instance_records,
    process_records,
)
from process_assertions.records.model import Record, RecordType, RejectionType
from process_assertions.records.source import InMemoryRecordStream
from process_assertions.records.value_types import (
    BpmnElementType,
    JobIntent,
    MessageIntent,
    ProcessInstanceIntent,
    ValueType,
)

PROCESS_ID = "filter-process"


@pytest.fixture
def instance(engine):
    engine.deploy_process("filter-process.bpmn", PROCESS_ID)
    return engine.start_process_instance(PROCESS_ID)


# ── Category Isolation ───────────────────────────────────────

class TestCategoryIsolation:
    def test_only_own_value_type(self, engine, record_stream, instance):
        engine.publish_message("order", "k")
        for record in message_records(record_stream).stream():
            assert record.value_type == ValueType.MESSAGE
        for record in process_instance_records(record_stream).stream():
            assert record.value_type == ValueType.PROCESS_INSTANCE

    def test_same_key_different_category(self, record_stream):
        record_stream.append(Record(
            position=1, key=5, value_type=ValueType.MESSAGE, intent=MessageIntent.PUBLISHED,
        ))
        record_stream.append(Record(
            position=2, key=5, value_type=ValueType.JOB, intent=JobIntent.CREATED,
        ))
        assert [r.position for r in message_records(record_stream).with_key(5).stream()] == [1]
        assert [r.position for r in job_records(record_stream).with_key(5).stream()] == [2]

    def test_foreign_intent_refused(self, record_stream):
        with pytest.raises(ValueError, match="is not an intent of MESSAGE records"):
            message_records(record_stream).with_intent(JobIntent.CREATED)

    def test_filter_class_bound_to_value_type(self, record_stream):
        with pytest.raises(ValueError, match="only filters PROCESS_INSTANCE records"):
            ProcessInstanceRecordFilter(source=record_stream, value_type=ValueType.JOB)

    def test_filter_for_every_value_type(self, record_stream):
        assert set(FILTERS_BY_VALUE_TYPE) == set(ValueType)
        for value_type in ValueType:
            assert filter_for(record_stream, value_type).value_type == value_type

    def test_filter_for_unknown_value_type(self, record_stream):
        with pytest.raises(ValueError, match="No stream filter"):
            filter_for(record_stream, "TIMER")


# ── Clause Semantics ─────────────────────────────────────────

class TestClauseSemantics:
    def test_clauses_combine_by_and(self, engine, record_stream, instance):
        engine.pass_element(instance.process_instance_key, "task")
        records = (
            process_instance_records(record_stream)
            .with_process_instance_key(instance.process_instance_key)
            .with_element_id("task")
            .with_intent(ProcessInstanceIntent.ELEMENT_COMPLETED)
            .to_list()
        )
        assert len(records) == 1
        assert records[0].get("element_id") == "task"
        assert records[0].intent is ProcessInstanceIntent.ELEMENT_COMPLETED

    def test_multiple_intents_are_alternatives(self, engine, record_stream, instance):
        records = (
            process_instance_records(record_stream)
            .with_bpmn_element_type(BpmnElementType.PROCESS)
            .with_intent(
                ProcessInstanceIntent.ELEMENT_ACTIVATING,
                ProcessInstanceIntent.ELEMENT_ACTIVATED,
            )
            .to_list()
        )
        assert [r.intent for r in records] == [
            ProcessInstanceIntent.ELEMENT_ACTIVATING,
            ProcessInstanceIntent.ELEMENT_ACTIVATED,
        ]

    def test_later_clause_replaces_earlier(self, engine, record_stream, instance):
        query = (
            process_instance_records(record_stream)
            .with_element_id("does-not-exist")
            .with_element_id("start")
        )
        assert query.exists()
        assert all(r.get("element_id") == "start" for r in query.stream())
        assert len(query.criteria) == 1

    def test_adding_clause_never_grows_result(self, engine, record_stream, instance):
        engine.pass_element(instance.process_instance_key, "task")
        base = process_instance_records(record_stream)
        narrowed = base.with_process_instance_key(instance.process_instance_key)
        narrower = narrowed.with_element_id("task")
        assert base.count() >= narrowed.count() >= narrower.count() > 0

    def test_filters_are_immutable(self, record_stream):
        base = process_records(record_stream)
        narrowed = base.with_bpmn_process_id(PROCESS_ID)
        assert base.criteria == ()
        assert narrowed is not base
        with pytest.raises(dataclasses.FrozenInstanceError):
            narrowed.criteria = ()

    def test_missing_value_field_never_matches(self, engine, record_stream):
        message = engine.publish_message("order", "k")
        engine.expire_message(message.message_key)
        expired = message_records(record_stream).with_intent(MessageIntent.EXPIRED)
        assert expired.exists()
        assert not expired.with_correlation_key(None).exists()
        assert not incident_records(record_stream).exists()

    def test_value_match_requires_same_type(self, engine, record_stream, instance):
        versions = process_records(record_stream).with_bpmn_process_id(PROCESS_ID)
        assert versions.with_version(1).exists()
        assert not versions.with_version(True).exists()
        assert not versions.with_version(1.0).exists()

    def test_rejection_and_record_type(self, engine, record_stream, instance):
        engine.reject(
            ValueType.JOB,
            JobIntent.COMPLETE,
            key=42,
            rejection_type=RejectionType.NOT_FOUND,
            reason="Expected to find job with key 42",
        )
        rejected = job_records(record_stream).with_rejection_type(RejectionType.NOT_FOUND)
        assert rejected.count() == 1
        assert rejected.with_record_type(RecordType.COMMAND_REJECTION).count() == 1
        assert not job_records(record_stream).with_rejection_type(RejectionType.NULL_VAL).exists()

    def test_empty_clause_refused(self, record_stream):
        with pytest.raises(ValueError, match="At least one value"):
            job_records(record_stream).with_intent()

    def test_describe(self, record_stream):
        query = (
            job_records(record_stream)
            .with_job_type("payment")
            .with_intent(JobIntent.CREATED, JobIntent.FAILED)
        )
        assert query.describe() == "JOB[type='payment', intent in (CREATED, FAILED)]"


# ── Evaluation ───────────────────────────────────────────────

class TestEvaluation:
    def test_emission_order(self, engine, record_stream, instance):
        positions = [r.position for r in process_instance_records(record_stream).stream()]
        assert positions == sorted(positions)

    def test_empty_result_is_not_an_error(self, record_stream):
        query = job_records(record_stream).with_key(1)
        assert query.to_list() == []
        assert query.first() is None
        assert query.last() is None
        assert query.count() == 0
        assert not query.exists()

    def test_first_and_last(self, engine, record_stream, instance):
        for _ in range(2):
            engine.pass_element(instance.process_instance_key, "task")
        query = (
            process_instance_records(record_stream)
            .with_element_id("task")
            .with_intent(ProcessInstanceIntent.ELEMENT_COMPLETED)
        )
        records = query.to_list()
        assert query.first() is records[0]
        assert query.last() is records[-1]
        assert records[0].key != records[-1].key

    def test_stream_is_lazy(self):
        class CountingSource:
            calls = 0

            def records(self):
                CountingSource.calls += 1
                return ()

        query = job_records(CountingSource()).with_key(1)
        assert CountingSource.calls == 0
        iterator = query.stream()
        assert CountingSource.calls == 0
        list(iterator)
        assert CountingSource.calls == 1

    def test_stream_is_restartable_and_sees_new_records(self, engine, record_stream, instance):
        query = process_instance_records(record_stream).with_element_id("task")
        assert query.count() == 0
        engine.pass_element(instance.process_instance_key, "task")
        assert query.count() == 4
        assert query.count() == 4

    def test_results_only_grow(self, engine, record_stream, instance):
        query = process_instance_records(record_stream).with_process_instance_key(
            instance.process_instance_key
        )
        before = query.to_list()
        engine.pass_element(instance.process_instance_key, "task")
        after = query.to_list()
        assert after[: len(before)] == before
        assert len(after) > len(before)

    def test_works_with_any_source(self):
        class ListSource:
            def __init__(self, records):
                self._records = records

            def records(self):
                return self._records

        source = ListSource([
            Record(position=1, key=3, value_type=ValueType.MESSAGE,
                   intent=MessageIntent.PUBLISHED, value={"name": "a"}),
        ])
        assert message_records(source).with_message_name("a").count() == 1

    def test_base_filter_can_be_used_directly(self, record_stream):
        query = StreamFilter(source=record_stream, value_type=ValueType.JOB)
        assert query.count() == 0

    def test_shared_source_across_threads(self, engine, record_stream, instance):
        import threading

        query = process_instance_records(record_stream).with_element_id("task")
        counts = []

        def reader():
            for _ in range(50):
                counts.append(query.count())

        thread = threading.Thread(target=reader)
        thread.start()
        for _ in range(20):
            engine.pass_element(instance.process_instance_key, "task")
        thread.join()

        assert counts == sorted(counts)
        assert query.count() == 80
