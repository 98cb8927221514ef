"""
Placement Selector — policy-based scheduling

Turns an abstract provisioning request into a concrete resource assignment.
Responsibilities:
- Profile resolution (named or "default")
- Storage pool matching against desired capability tags
- Dock (backend) resolution for a pool or a volume
"""
