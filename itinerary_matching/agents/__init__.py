"""
Agents Module
Pipeline orchestration for inquiry matching
"""

from .matching_agent import InquiryMatchingAgent, process_inquiry

__all__ = [
    "InquiryMatchingAgent",
    "process_inquiry"
]
