"""
The MODEL layer contains pure data structures and request logic.
It has NO knowledge of the GUI (Qt) or the network (requests).
It deals with Parameters, Payloads, Results and the Submission cycle.
"""
