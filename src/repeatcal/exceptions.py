#
# For licensing see accompanying LICENSE file.
# Copyright © 2025 Apple Inc. All Rights Reserved.
#
class RepeatRuleError(Exception):
    pass


class UnboundedRepeatError(RepeatRuleError):
    pass


class EventDefinitionError(Exception):
    pass
