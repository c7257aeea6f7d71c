# Copyright (c) 2025 The Conciencia Authors
# This file is part of the Conciencia - Your Therapy Journal project.
# Licensed under the MIT License - see the LICENSE file for details.


from .profile import Profile
from .emotional_record import EmotionalRecord
from .goal import Goal
from .habit import Habit, HabitCheckin
from .notification import NotificationConfig
from .achievement import Achievement
from .conversation import Conversation, ChatMessage
