"""Sample inputs offered by the UI "Load sample" buttons."""

SAMPLE_EMAIL = """Subject: RE: Conference Room Install - Equipment Delay Update
From: Sarah Martinez (Project Manager)
Date: November 12, 2024
To: Mark Davidson (Client), Team

Hi Mark,

Quick update on the Enterprise Conference Room project.

Good news: Most equipment arrived yesterday and is staged for the November 30th installation. The team has completed the pre-wire and mounting brackets are in place.

However, we've hit a snag with the Crestron processor. Our supplier just notified me that it's delayed until December 5th due to a supply chain issue at the manufacturer. This affects our ability to deliver full system automation by your December 3rd board meeting.

OPTIONS:
1. We can rig a temporary basic control system (James estimates 1 day of work)
2. Wait for the Crestron and reschedule the board meeting demo
3. Expedite shipping (checking if possible, may incur additional cost)

I'm escalating this with our account manager and the supplier today to see if we can expedite. I'll have a concrete recommendation and cost estimate for you by Friday EOD.

Please let me know if you have a strong preference on approach, otherwise I'll move forward with Option 1 as backup while we pursue expediting.

Thanks,
Sarah

--
Sarah Martinez
Senior Project Manager
AVI-SPL
sarah.martinez@avispl.com"""

SAMPLE_TRANSCRIPT = """Weekly Project Status - Enterprise Conference Room Buildout
Date: November 12, 2024
Attendees: Sarah (PM), Mark (Client), James (AV Tech)

Sarah: "Quick update - we're on track for the November 30th install date. Equipment arrived yesterday except for the Crestron processor."

Mark: "Wait, what? I thought everything was here. When's the processor coming?"

Sarah: "Supplier says December 5th now. Supply chain issue. We can work around it temporarily but means we won't have full automation until early December."

Mark: "That's a problem. We have the board meeting December 3rd and promised them the new system would be live."

James: "I can probably rig a basic control system as a stopgap, but it won't be pretty."

Sarah: "Let me escalate with the supplier and see if we can expedite. I'll also loop in our account manager to discuss options. Mark, can you give me 48 hours before we decide on the workaround?"

Mark: "Fine. But I need a concrete plan by Friday."

Sarah: "Noted. James, can you map out what the temporary setup would look like - just in case?"

James: "Yeah, I'll have something by Thursday.\""""
