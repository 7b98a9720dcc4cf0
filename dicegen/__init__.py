"""dicegen - tabletop dice notation parser and roller."""
