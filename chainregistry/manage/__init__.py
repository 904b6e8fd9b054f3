"""Collecting chain configs, compressed genesis files, config I/O, JSON containment and staging."""