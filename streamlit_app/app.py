"""Workout plan preview — Streamlit operator dashboard.

Paste a workout definition, inspect the flattened segments and the compiled
watch plan, download the Garmin JSON, or push a single payload through the
sync bridge.

Run with:
    streamlit run streamlit_app/app.py
"""

from __future__ import annotations

import json
from datetime import datetime, time
from pathlib import Path

import streamlit as st

from garmin_client import GarminClient
from plan_compiler.exceptions import MalformedEntry, MalformedEntryError
from plan_compiler.flattener import flatten_segments
from plan_compiler.models.enums import ExtractionPolicy, MalformedPolicy
from plan_compiler.plan_builder import build_workout_plan
from plan_compiler.serialization import plan_to_dict, to_garmin_json_string
from watch_sync import BridgeError, JsonFileStore, SyncOrchestrator, SyncSettings, WorkoutKitBridge
from watch_sync.garmin import GarminAuthorizationService, GarminWorkoutScheduler

from helpers import (
    SAMPLE_DEFINITION,
    format_seconds,
    parse_definition,
    plan_to_frame,
    segments_to_frame,
    total_planned_seconds,
)

# ---------------------------------------------------------------------------
# Page config
# ---------------------------------------------------------------------------

st.set_page_config(
    page_title="Workout Plan Preview",
    page_icon="⌚",
    layout="wide",
)

# ---------------------------------------------------------------------------
# Sidebar: compiler options
# ---------------------------------------------------------------------------

with st.sidebar:
    st.header("Compiler")
    extraction = ExtractionPolicy[st.selectbox(
        "Warmup / cooldown extraction",
        [p.name for p in ExtractionPolicy],
        help="BY_KIND finds them anywhere; POSITIONAL needs first / last place.",
    )]
    on_malformed = MalformedPolicy[st.selectbox(
        "Malformed segments",
        [p.name for p in MalformedPolicy],
        index=1,
    )]
    title = st.text_input("Workout title", value="Intervals 5x1k")

    st.header("Garmin Connect")
    token_dir = Path(st.text_input("Token directory", value="~/.garminconnect")).expanduser()
    state_path = st.text_input("Sync state file", value="~/.workout_sync/state.json")


# ---------------------------------------------------------------------------
# Definition input
# ---------------------------------------------------------------------------

st.title("Workout Plan Preview")
definition_text = st.text_area(
    "Workout definition (JSON)",
    value=json.dumps(SAMPLE_DEFINITION, indent=2),
    height=320,
)

try:
    definition = parse_definition(definition_text)
except ValueError as e:
    st.error(f"Invalid definition: {e}")
    st.stop()

issues: list[MalformedEntry] = []
try:
    segments = flatten_segments(definition, on_malformed=on_malformed, issues=issues)
except MalformedEntryError as e:
    st.error(f"Malformed segment: {e}")
    st.stop()

for issue in issues:
    st.warning(f"Dropped {issue}")

tab_segments, tab_plan, tab_sync = st.tabs(["Segments", "Watch Plan", "Sync"])

with tab_segments:
    st.metric("Flattened segments", len(segments))
    if segments:
        st.dataframe(segments_to_frame(segments), use_container_width=True, hide_index=True)
    else:
        st.info("The definition has no segments; sync would skip it.")

plan = build_workout_plan(title, segments, extraction=extraction) if segments else None

with tab_plan:
    if plan is None:
        st.info("Nothing to compile.")
    else:
        c1, c2, c3 = st.columns(3)
        c1.metric("Intervals", len(plan.intervals))
        c2.metric("Warmup / Cooldown", f"{'yes' if plan.warmup else 'no'} / {'yes' if plan.cooldown else 'no'}")
        c3.metric("Timed total", format_seconds(total_planned_seconds(plan)))
        st.dataframe(plan_to_frame(plan), use_container_width=True, hide_index=True)
        with st.expander("Plan JSON"):
            st.json(plan_to_dict(plan))
        st.download_button(
            "Download Garmin Workout (.json)",
            data=to_garmin_json_string(plan),
            file_name=f"{title[:24].replace(' ', '_')}.json",
            mime="application/json",
        )

with tab_sync:
    bridge = WorkoutKitBridge(SyncOrchestrator(
        scheduler=GarminWorkoutScheduler(lambda: GarminClient.from_tokens(token_dir)),
        authorizer=GarminAuthorizationService(token_dir),
        store=JsonFileStore(state_path),
        settings=SyncSettings(extraction=extraction, on_malformed=on_malformed),
    ))
    st.caption(f"Authorization: {bridge.handle('getAuthorizationStatus')}")
    if st.button("Check Garmin tokens"):
        st.info(f"Status: {bridge.handle('requestAuthorization')}")

    payload_id = st.text_input("Payload id", value=f"preview-{datetime.now():%Y%m%d%H%M}")
    day = st.date_input("Scheduled date")
    at = st.time_input("Scheduled time", value=time(7, 0))
    if st.button("Push to Garmin", type="primary", disabled=plan is None):
        scheduled_at = datetime.combine(day, at)
        payload = {
            "id": payload_id,
            "title": title,
            "scheduledAtMs": scheduled_at.timestamp() * 1000,
            "definition": definition,
        }
        try:
            report = bridge.sync_scheduled_workouts([payload])
        except BridgeError as e:
            st.error(f"Sync failed: {e}")
        else:
            if report.scheduled:
                st.success(f"Scheduled {payload_id} for {scheduled_at:%Y-%m-%d %H:%M}")
            elif report.duplicates:
                st.info(f"{payload_id} was already sent; nothing to do.")
            else:
                st.warning("Payload was dropped; see warnings above.")
