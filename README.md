# asabr

Building blocks for schedule-aware routing in delay-tolerant networks:
bundles, nodes, contacts, per-contact resource managers, route distance
strategies, a sender/receiver multigraph, and readers for three contact plan
formats.

## Installation

    pip install .

To run the test suite:

    pip install ".[test]"
    pytest

## Overview

- `asabr.bundle.Bundle` — source, destinations, priority (lower is more
  important), size and expiration of the data to route. `Bundle.shadows`
  tells whether routes computed for one bundle may have skipped paths usable
  by another, by size and/or by priority.
- `asabr.node.NodeInfo` / `asabr.node.Node` — node id, name and exclusion
  flag, plus the node's manager. Nodes sort and compare by id.
- `asabr.contact.ContactInfo` / `asabr.contact.Contact` — transmitter,
  receiver and time window of a link, plus its manager. `Contact.try_new`
  returns `None` when the window is empty or the manager's `try_init` fails.
  Contacts sort by transmitter, receiver, then start time.
- `asabr.node_manager` — the `NodeManager` interface (`dry_run_process`,
  `dry_run_tx`, `dry_run_rx` and their `schedule_*` counterparts) and
  `NoManagement`, which adds no processing delay and accepts any window.
- `asabr.contact_manager` — `ContactManager`, `ContactManagerTxData` and the
  volume managers built on `BasicVolumeManager`:
  - `EVLManager`: booked volume only, updated on `schedule_tx`;
  - `QDManager`: booked volume also delays the transmission start;
  - `ETOManager`: booked volume delays the start, but is maintained
    externally with `enqueue` / `dequeue` (both raise `ValueError` on
    overflow or underflow).
- `asabr.priority_evl.PriorityEVLManager` — an EVL manager with three
  priority levels (0 is the most important), each with its own maximum
  available volume (`mav_for`). Scheduling at one level also consumes the
  budget of every less important level; bundles arriving after their
  expiration are refused. `PriorityEVLManager.legacy(rate, delay)` derives
  default budgets from the rate.
- `asabr.segmentation.Segment` / `SegmentationManager` — contacts whose rate
  and delay vary over time. `try_init` checks that the rate and delay
  segments cover the contact without gaps; `schedule_tx` books time by
  splitting the free intervals.
- `asabr.distance` — `SABR` (earliest arrival, then fewest hops, then latest
  expiration) and `Hop` (fewest hops, then earliest arrival, then latest
  expiration). Each offers `cmp`, `eq`, `can_retain` and `must_prune` over
  any object with `at_time`, `hop_count` and `expiration`.
  `DistanceWrapper(stage, distance)` makes such objects orderable, e.g. in
  `heapq`.
- `asabr.multigraph.Multigraph(nodes, contacts)` — `senders[i]` holds node
  `i` and its `Receiver`s, each with the contacts to that receiver sorted by
  start time. `Receiver.lazy_prune_and_get_first_idx(time)` skips contacts
  that have ended; `Multigraph.apply_exclusions_sorted(ids)` sets each node's
  `excluded` flag.

## Reading contact plans

### Native format

Whitespace separated tokens; lines whose first non-blank character is `#`
are comments. With a marker map, each element names its manager:

    node 0 alpha none
    node 1 beta none
    contact 0 1 0 100 evl 10 1

(`evl 10 1` is a rate of 10 and a delay of 1.) Parse it by passing `None`
as the manager types so that markers are looked up in the maps:

    from asabr.asabr_plan import ASABRContactPlan
    from asabr.contact_manager import EVLManager
    from asabr.file_lexer import FileLexer
    from asabr.node_manager import NoManagement
    from asabr.parsing import Dispatcher

    node_markers = Dispatcher()
    node_markers.add("none", NoManagement.parse)
    contact_markers = Dispatcher()
    contact_markers.add("evl", EVLManager.parse)

    with FileLexer("plan.cp") as lexer:
        nodes, contacts = ASABRContactPlan().parse(
            lexer, None, None, node_markers, contact_markers
        )

When every element uses the same managers, pass the manager types instead;
the plan then carries no markers (`node 0 alpha`, `contact 0 1 0 100 10 1`):

    with FileLexer("plan.cp") as lexer:
        nodes, contacts = ASABRContactPlan().parse(lexer, NoManagement, EVLManager)

Node ids and names must be unique, and node declarations must run from 0
to the highest id used by a contact. Problems raise
`asabr.asabr_plan.ContactPlanError`, a subclass of
`asabr.parsing.ParsingError`. An `ASABRContactPlan` remembers the nodes it
has seen, so use a fresh one per plan.

Other lexers can be written by subclassing `asabr.parsing.Lexer`
(`lookup`, `consume_next_token`, `current_position`).

### ION plans and tvgutil JSON

- `asabr.ion_plan.parse_ion_file(path, manager_type)` reads `a contact` and
  `a range` lines; each contact takes its delay from the single range of the
  same node pair that encloses it. Node ids follow order of first
  appearance.
- `asabr.tvgutil_plan.parse_tvgutil_file(path, manager_type)` reads a JSON
  time-varying graph; node ids follow sorted vertex names.

Both return `(nodes, contacts)` with `NoManagement` nodes. `manager_type`
must be a `BasicVolumeManager` subclass (`EVLManager`, `QDManager`,
`ETOManager`) or `SegmentationManager`; anything else raises `TypeError`.
Malformed input raises `ValueError`.

## What this package does not do

It provides the data model and resource bookkeeping for routing, but no
route computation: there is no pathfinding over the multigraph, no route
cache or router that schedules bundles end to end, and no command-line
program.