"""
Host metric collectors for the server-stats report.

Each module pairs pure parsers (raw tool output in, structured value or None
out) with collect_* functions that run the tools and build MetricSamples:
- cpu_usage.py: CPU busy/idle percentage, core count, load per core
- memory_usage.py: memory and swap usage from free
- disk_usage.py: /dev/ filesystems from df
- scan_processes.py: top processes by CPU and by memory from ps
- system_identity.py: OS name, kernel, uptime, load average, boot time
- user_sessions.py: logged-in users (who) and failed logins (lastb)
- network_ports.py: listening socket count and per-interface traffic

Collectors never raise for a missing tool, a permission problem or an
unexpected format; they fall through their probe list and report N/A.
"""
