"""Railway History Viewer - the Eurasian railway network as of any year.

Resolves which stations and segments existed in a chosen year from a
static catalogue and a dated event log, and shows them on a map:
- Year-specific state per entity (new, electrified, closed, existing)
- Approximate station locations drawn as uncertainty circles
- Network growth over the whole 1832-1989 range

Modules:
    core: Resolver, timeline cache, date parsing, network statistics
    model: Data structures (Station, Segment, Event, DatabaseSnapshot, YearView)
    data: Snapshot loading (file, URL, upload, bundled demo database)
    ui: Streamlit interface components (state machine, map, panels, chart)

Example:
    from railhistory.core.resolver import resolve
    from railhistory.data import load_demo_snapshot

    snapshot = load_demo_snapshot()
    view = resolve(year=1900, catalogue=snapshot.catalogue, event_log=snapshot.event_log)
"""
