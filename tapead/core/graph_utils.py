"""
Tape inspection utilities.
Summaries and text dumps of the records on a tape, for debugging.
"""

import numpy as np
from typing import Dict, List
from collections import Counter


def _fan_outs(tape) -> List[int]:
    # number of records reading each slot
    fan_outs = [0] * tape.size
    for record in tape.records:
        for slot in record.operands:
            if slot is not None:
                fan_outs[slot] += 1
    return fan_outs


def tape_stats(tape) -> Dict:
    """
    Statistics of the recorded computation (no printing).

    Returns:
        dict with records, slots, edges, fan-in/fan-out and an
        operation histogram
    """
    if not tape.records:
        return {
            'records': 0,
            'slots': tape.size,
            'edges': 0,
            'max_fan_in': 0,
            'avg_fan_in': 0.0,
            'max_fan_out': 0,
            'avg_fan_out': 0.0,
            'operations': {}
        }

    # fan-in counts only operands that live on the tape
    fan_ins = [sum(s is not None for s in r.operands) for r in tape.records]
    fan_outs = _fan_outs(tape)

    return {
        'records': len(tape.records),
        'slots': tape.size,
        'edges': sum(fan_ins),
        'max_fan_in': max(fan_ins),
        'avg_fan_in': float(np.mean(fan_ins)),
        'max_fan_out': max(fan_outs) if fan_outs else 0,
        'avg_fan_out': float(np.mean(fan_outs)) if fan_outs else 0.0,
        'operations': dict(Counter(r.op_tag for r in tape.records))
    }


def format_tape(tape, max_records: int = 20) -> str:
    """
    One line per record:
        %3 = mul(%1, const)        -> 4.0
    """
    if not tape.records:
        return "Empty tape"

    lines = []
    for record in tape.records[:max_records]:
        operands = ", ".join("const" if s is None else f"%{s}" for s in record.operands)
        call = f"%{record.index} = {record.op_tag}({operands})"
        lines.append(f"{call:30s} -> {record.value!r}")

    if len(tape.records) > max_records:
        lines.append(f"... ({len(tape.records) - max_records} more records)")
    return "\n".join(lines)


def print_tape_summary(tape, detailed: bool = False) -> Dict:
    """
    Print a summary of the tape.

    Args:
        tape: the Tape to describe
        detailed: also print the first records

    Returns:
        the tape_stats() dictionary
    """
    stats = tape_stats(tape)

    print("\n" + "="*70)
    print("TAPE SUMMARY")
    print("="*70)
    print(f"Records:            {stats['records']:,}")
    print(f"Slots:              {stats['slots']:,}")
    print(f"Edges:              {stats['edges']:,}")
    print(f"Max fan-in:         {stats['max_fan_in']}")
    print(f"Avg fan-in:         {stats['avg_fan_in']:.2f}")
    print(f"Max fan-out:        {stats['max_fan_out']}")
    print(f"Avg fan-out:        {stats['avg_fan_out']:.2f}")
    if stats['operations']:
        print()
        print("Operation breakdown:")
        for op_tag, count in Counter(stats['operations']).most_common(10):
            pct = 100.0 * count / stats['records']
            print(f"  {op_tag:12s}: {count:6,} ({pct:5.1f}%)")

    if detailed:
        print()
        print(format_tape(tape))
    print("="*70 + "\n")

    return stats
